"""
Table client and row-level security
"""
import pytest

from app.core.exceptions import StoreError


JOB = {"title": "Backend Engineer", "description": "Build APIs"}


async def test_select_orders_newest_first(sign_in, store_for):
    context = await sign_in()
    store = store_for(context)
    for title in ("First", "Second", "Third"):
        await store.table("jobs").insert({**JOB, "title": title, "created_by": context.user_id})

    result = await store.table("jobs").select("id, title", order_by="created_at", ascending=False)

    assert [row["title"] for row in result.rows] == ["Third", "Second", "First"]
    assert set(result.rows[0]) == {"id", "title"}


async def test_insert_fills_generated_columns(sign_in, store_for):
    context = await sign_in()
    result = await store_for(context).table("jobs").insert({**JOB, "created_by": context.user_id})

    row = result.rows[0]
    assert row["id"]
    assert row["status"] == "open"
    assert row["created_at"] is not None
    assert row["department"] is None


async def test_count_only_returns_no_rows(sign_in, store_for):
    context = await sign_in()
    store = store_for(context)
    await store.table("candidates").insert({"full_name": "Jane Doe", "email": "jane@x.com"})
    await store.table("candidates").insert({"full_name": "John Roe", "email": "john@x.com"})

    result = await store.table("candidates").select("id", count_only=True)

    assert result.rows == []
    assert result.count == 2
    assert await store.table("applications").count() == 0


async def test_viewer_cannot_insert(sign_in, store_for):
    context = await sign_in("viewer@acme.io", role="viewer")

    with pytest.raises(StoreError) as exc:
        await store_for(context).table("candidates").insert({"full_name": "Jane", "email": "jane@x.com"})

    assert exc.value.message == 'new row violates row-level security policy for table "candidates"'
    assert exc.value.code == "42501"


async def test_job_must_be_created_for_the_caller(sign_in, store_for, make_user):
    context = await sign_in()
    someone_else = make_user("other@acme.io")

    with pytest.raises(StoreError):
        await store_for(context).table("jobs").insert({**JOB, "created_by": someone_else})


async def test_anonymous_reads_see_nothing(sign_in, anonymous_context, store_for):
    context = await sign_in()
    await store_for(context).table("jobs").insert({**JOB, "created_by": context.user_id})

    result = await store_for(anonymous_context).table("jobs").select()

    assert result.rows == []


async def test_foreign_keys_are_enforced(sign_in, store_for):
    context = await sign_in()

    with pytest.raises(StoreError) as exc:
        await store_for(context).table("applications").insert({"candidate_id": "missing", "job_id": "missing"})

    assert "FOREIGN KEY" in exc.value.message


async def test_missing_required_column_reports_store_message(sign_in, store_for):
    context = await sign_in()

    with pytest.raises(StoreError) as exc:
        await store_for(context).table("candidates").insert({"full_name": "No Email"})

    assert "email" in exc.value.message


async def test_unknown_table_and_column(sign_in, store_for):
    store = store_for(await sign_in())

    with pytest.raises(StoreError) as exc:
        store.table("users")
    assert exc.value.code == "42P01"

    with pytest.raises(StoreError) as exc:
        await store.table("jobs").select("id, salary")
    assert exc.value.code == "42703"


async def test_only_owner_or_admin_updates_a_job(sign_in, store_for, make_user):
    owner = await sign_in("owner@acme.io")
    job = (await store_for(owner).table("jobs").insert({**JOB, "created_by": owner.user_id})).rows[0]

    other = await sign_in("other@acme.io")
    untouched = await store_for(other).table("jobs").update({"status": "closed"}, id=job["id"])
    assert untouched.rows == []

    admin = await sign_in("admin@acme.io", role="admin")
    closed = await store_for(admin).table("jobs").update({"status": "closed"}, id=job["id"])
    assert closed.rows[0]["status"] == "closed"


async def test_profiles_are_private(sign_in, store_for):
    alice = await sign_in("alice@acme.io")
    await sign_in("bob@acme.io")

    rows = (await store_for(alice).table("profiles").select("id, email")).rows

    assert [row["email"] for row in rows] == ["alice@acme.io"]


async def test_has_role(sign_in, store_for):
    context = await sign_in("admin@acme.io", role="admin")
    store = store_for(context)

    assert await store.rpc_has_role(context.user_id, "admin") is True
    assert await store.rpc_has_role(context.user_id, "viewer") is False


async def test_profiles_are_written_by_admins_only(sign_in, store_for):
    alice = await sign_in("alice@acme.io")

    untouched = await store_for(alice).table("profiles").update({"full_name": "Changed"}, id=alice.user_id)
    assert untouched.rows == []

    admin = await sign_in("admin@acme.io", role="admin")
    renamed = await store_for(admin).table("profiles").update({"full_name": "Changed"}, id=alice.user_id)
    assert renamed.rows[0]["full_name"] == "Changed"


async def test_count_follows_row_policies(sign_in, store_for, anonymous_context):
    alice = await sign_in("alice@acme.io")
    await sign_in("bob@acme.io")
    store = store_for(alice)
    await store.table("candidates").insert({"full_name": "Jane Doe", "email": "jane@x.com"})

    assert await store.table("candidates").count() == 1
    assert await store.table("profiles").count() == 1
    assert await store_for(anonymous_context).table("candidates").count() == 0


async def test_out_of_range_integer_is_a_store_error(sign_in, store_for):
    context = await sign_in()
    store = store_for(context)

    with pytest.raises(StoreError):
        await store.table("candidates").insert(
            {"full_name": "Jane Doe", "email": "jane@x.com", "experience_years": 10**20}
        )
    assert await store.table("candidates").count() == 0
