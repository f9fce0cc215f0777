"""Integration tests for goal endpoints."""
import pytest

TODAY = "2026-10-19"


async def create_habit(client):
    response = await client.post(f"/habits?today={TODAY}", json={"name": "Exercise"})
    return response.json()


@pytest.mark.asyncio
class TestGoalCreate:
    """Tests for creating goals."""

    async def test_create_free_goal(self, app_client):
        """Test successful goal creation."""
        response = await app_client.post(
            f"/goals?today={TODAY}",
            json={"title": "Read 12 books", "targetValue": 12, "unit": "books", "period": "year"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Read 12 books"
        assert data["targetValue"] == 12
        assert data["progress"] == 0
        assert data["completed"] is False
        assert data["habitId"] is None
        assert "id" in data

    async def test_create_goal_unknown_habit(self, app_client):
        """Test linking to a missing habit."""
        response = await app_client.post(
            f"/goals?today={TODAY}", json={"title": "Work out", "habitId": "missing"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Habit not found"

    async def test_create_goal_invalid_target(self, app_client):
        """Test that a zero target is rejected."""
        response = await app_client.post("/goals", json={"title": "Work out", "targetValue": 0})

        assert response.status_code == 422


@pytest.mark.asyncio
class TestGoalProgress:
    """Tests for goal progress."""

    async def test_linked_goal_completes(self, app_client):
        """Test a weekly goal of 2 met by two completions."""
        habit = await create_habit(app_client)
        for day in ("2026-10-18", "2026-10-19"):
            await app_client.put(
                f"/habits/{habit['id']}/completions/{day}?today={TODAY}",
                json={"completed": True},
            )

        response = await app_client.post(
            f"/goals?today={TODAY}",
            json={"title": "Twice a week", "habitId": habit["id"], "targetDays": 2, "period": "week"},
        )

        data = response.json()
        assert data["progress"] == 2
        assert data["completed"] is True
        assert data["percent"] == 100
        assert data["habitName"] == "Exercise"

    async def test_goal_orphaned_after_habit_delete(self, app_client):
        """Test that goals survive their habit's deletion."""
        habit = await create_habit(app_client)
        goal = (await app_client.post(
            f"/goals?today={TODAY}", json={"title": "Work out", "habitId": habit["id"]}
        )).json()

        await app_client.delete(f"/habits/{habit['id']}?today={TODAY}")
        response = await app_client.get(f"/goals/{goal['id']}?today={TODAY}")

        assert response.status_code == 200
        assert response.json()["orphaned"] is True
        assert response.json()["progress"] == 0

    async def test_orphaned_goal_accepts_progress(self, app_client):
        """Test manual progress on a goal whose habit was deleted."""
        habit = await create_habit(app_client)
        goal = (await app_client.post(
            f"/goals?today={TODAY}", json={"title": "Work out", "habitId": habit["id"]}
        )).json()
        await app_client.delete(f"/habits/{habit['id']}?today={TODAY}")

        response = await app_client.post(
            f"/goals/{goal['id']}/progress?today={TODAY}", json={"amount": 1}
        )

        assert response.status_code == 200
        assert response.json()["progress"] == 1
        assert response.json()["orphaned"] is True

    async def test_unlink_goal(self, app_client):
        """Test clearing habitId, and that it cannot be relinked."""
        habit = await create_habit(app_client)
        goal = (await app_client.post(
            f"/goals?today={TODAY}", json={"title": "Work out", "habitId": habit["id"]}
        )).json()

        unlinked = await app_client.patch(f"/goals/{goal['id']}?today={TODAY}", json={"habitId": None})
        relinked = await app_client.patch(f"/goals/{goal['id']}", json={"habitId": habit["id"]})

        assert unlinked.status_code == 200
        assert unlinked.json()["habitId"] is None
        assert unlinked.json()["orphaned"] is False
        assert relinked.status_code == 422

    async def test_manual_progress(self, app_client):
        """Test adding progress to a free goal."""
        goal = (await app_client.post(
            f"/goals?today={TODAY}", json={"title": "Read", "targetValue": 2}
        )).json()

        await app_client.post(f"/goals/{goal['id']}/progress?today={TODAY}", json={})
        response = await app_client.post(
            f"/goals/{goal['id']}/progress?today={TODAY}", json={"amount": 1}
        )

        assert response.status_code == 200
        assert response.json()["currentValue"] == 2
        assert response.json()["completed"] is True

    async def test_manual_progress_linked_goal(self, app_client):
        """Test that linked goals reject manual progress."""
        habit = await create_habit(app_client)
        goal = (await app_client.post(
            f"/goals?today={TODAY}", json={"title": "Work out", "habitId": habit["id"]}
        )).json()

        response = await app_client.post(f"/goals/{goal['id']}/progress", json={"amount": 1})

        assert response.status_code == 400


@pytest.mark.asyncio
class TestGoalUpdateDelete:
    """Tests for updating, listing and deleting goals."""

    async def test_update_goal(self, app_client):
        """Test a partial update."""
        goal = (await app_client.post(f"/goals?today={TODAY}", json={"title": "Read"})).json()

        response = await app_client.patch(
            f"/goals/{goal['id']}?today={TODAY}", json={"title": "Read more", "deadline": "2026-12-31"}
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Read more"
        assert response.json()["deadline"] == "2026-12-31"

    async def test_list_and_delete(self, app_client):
        """Test listing and deleting goals."""
        goal = (await app_client.post(f"/goals?today={TODAY}", json={"title": "Read"})).json()

        listed = await app_client.get(f"/goals?today={TODAY}")
        deleted = await app_client.delete(f"/goals/{goal['id']}")
        missing = await app_client.get(f"/goals/{goal['id']}")

        assert [g["id"] for g in listed.json()] == [goal["id"]]
        assert deleted.json() == {"deleted_count": 1}
        assert missing.status_code == 404
