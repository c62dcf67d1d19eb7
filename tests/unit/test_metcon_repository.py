"""
Unit tests for infrastructure/db/metcon_workout_repository.py
"""
import pytest

from application.exceptions import DomainValidationError, ReferenceNotFoundError
from domain.models import MetconMovement, MetconWorkout
from infrastructure.db import MetconWorkoutRepository
from infrastructure.db.schema import METCON_MOVEMENTS, METCON_WORKOUTS
from tests.fakes import AMRAP, FOR_TIME, PULL_UP, ROW, seed_session

pytestmark = pytest.mark.unit


@pytest.fixture
def workouts(seeded_store):
    return MetconWorkoutRepository(seeded_store)


@pytest.fixture
def session_a(seeded_store):
    return seed_session(seeded_store, "session-a", "user-a")


def metcon_for(session_id: str, **overrides) -> MetconWorkout:
    values = {
        "workout_session_id": session_id,
        "metcon_type_id": AMRAP,
        "rounds": 5,
        "time_cap_minutes": 20,
        "movements": [
            MetconMovement(movement_type_id=PULL_UP, reps=10),
            MetconMovement(movement_type_id=ROW, distance=500),
        ],
    }
    values.update(overrides)
    return MetconWorkout(**values)


class TestCreate:
    @pytest.mark.asyncio
    async def test_saves_movements_in_order(self, workouts, session_a, seeded_store):
        created = await workouts.create(metcon_for(session_a.id), owner_id="user-a")

        assert created.order == 1
        assert [m.order for m in created.movements] == [1, 2]
        assert all(m.metcon_workout_id == created.id for m in created.movements)
        assert len(seeded_store.get_all(METCON_MOVEMENTS)) == 2
        # movements live in their own table
        assert "movements" not in seeded_store.get_all(METCON_WORKOUTS)[0]

    @pytest.mark.asyncio
    async def test_read_hydrates_movements(self, workouts, session_a):
        created = await workouts.create(metcon_for(session_a.id), owner_id="user-a")

        loaded = await workouts.get_by_id(created.id, owner_id="user-a")

        assert [m.movement_type_id for m in loaded.movements] == [PULL_UP, ROW]
        assert loaded.movements[1].distance == 500

    @pytest.mark.asyncio
    async def test_rounds_out_of_range(self, workouts, session_a):
        with pytest.raises(DomainValidationError) as exc_info:
            await workouts.create(metcon_for(session_a.id, rounds=101), owner_id="user-a")
        assert exc_info.value.field == "rounds"

    @pytest.mark.asyncio
    async def test_time_cap_quarter_increment(self, workouts, session_a):
        with pytest.raises(DomainValidationError) as exc_info:
            await workouts.create(
                metcon_for(session_a.id, time_cap_minutes=12.1), owner_id="user-a"
            )
        assert exc_info.value.field == "time_cap_minutes"

    @pytest.mark.asyncio
    async def test_movement_measured_the_wrong_way(self, workouts, session_a):
        workout = metcon_for(
            session_a.id, movements=[MetconMovement(movement_type_id=ROW, reps=20)]
        )
        with pytest.raises(DomainValidationError) as exc_info:
            await workouts.create(workout, owner_id="user-a")
        assert exc_info.value.field == "movements"
        assert "distance" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_unknown_movement_type(self, workouts, session_a):
        workout = metcon_for(
            session_a.id, movements=[MetconMovement(movement_type_id=99, reps=20)]
        )
        with pytest.raises(ReferenceNotFoundError):
            await workouts.create(workout, owner_id="user-a")

    @pytest.mark.asyncio
    async def test_unknown_metcon_type(self, workouts, session_a):
        with pytest.raises(ReferenceNotFoundError):
            await workouts.create(metcon_for(session_a.id, metcon_type_id=42), owner_id="user-a")


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_replaces_movements(self, workouts, session_a, seeded_store):
        created = await workouts.create(metcon_for(session_a.id), owner_id="user-a")

        updated = await workouts.update(
            created.model_copy(
                update={
                    "rounds": 6,
                    "movements": [MetconMovement(movement_type_id=PULL_UP, reps=15)],
                }
            ),
            owner_id="user-a",
        )

        assert updated.rounds == 6
        assert [m.reps for m in updated.movements] == [15]
        assert len(seeded_store.get_all(METCON_MOVEMENTS)) == 1

    @pytest.mark.asyncio
    async def test_delete_removes_movements(self, workouts, session_a, seeded_store):
        created = await workouts.create(metcon_for(session_a.id), owner_id="user-a")

        assert await workouts.delete(created.id, owner_id="user-a") is True

        assert seeded_store.get_all(METCON_WORKOUTS) == []
        assert seeded_store.get_all(METCON_MOVEMENTS) == []
        assert await workouts.delete(created.id, owner_id="user-a") is False


class TestListing:
    @pytest.mark.asyncio
    async def test_list_by_metcon_type(self, workouts, session_a):
        await workouts.create(metcon_for(session_a.id), owner_id="user-a")
        await workouts.create(metcon_for(session_a.id, metcon_type_id=FOR_TIME), owner_id="user-a")

        amraps = await workouts.list_by_metcon_type("user-a", AMRAP)
        session_workouts = await workouts.list_by_session(session_a.id, "user-a")

        assert len(amraps) == 1
        assert len(amraps[0].movements) == 2
        assert [w.order for w in session_workouts] == [1, 2]
        assert await workouts.list_by_metcon_type("user-b", AMRAP) == []
