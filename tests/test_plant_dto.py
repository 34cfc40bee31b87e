"""
Read-side projection tests: DTO mapping and encouragement messages.
"""

import pytest

from app.modules.plant_growth.application.dto.plant_dto import PlantStateDTO
from app.modules.plant_growth.domain.models.plant import Flower, PlantStage
from app.modules.plant_growth.domain.services.encouragement import (
    DEAD_MESSAGE,
    HEALTHY_MESSAGES,
    WILTING_LONG_TEXT,
    WILTING_RECENT_TEXT,
    encouragement_message,
    streak_message,
)
from tests.conftest import START, make_state


@pytest.mark.parametrize("streak,fragment", [
    (0, ""),
    (1, "Growing stronger"),
    (4, "4 days"),
    (7, "Week-long"),
    (12, "12 days of mindful growth"),
])
def test_streak_message(streak, fragment):
    message = streak_message(streak)
    if fragment:
        assert fragment in message
    else:
        assert message == ""


class TestEncouragement:

    def test_healthy_plant_gets_stage_message(self):
        state = make_state(stage=PlantStage.BLOOMING)
        assert encouragement_message(state) == HEALTHY_MESSAGES[PlantStage.BLOOMING]

    def test_recently_wilting(self):
        state = make_state(health=76, wilting_started=True, days_since_last_entry=5)
        assert encouragement_message(state).text == WILTING_RECENT_TEXT

    def test_long_wilting(self):
        state = make_state(health=44, wilting_started=True, days_since_last_entry=6)
        assert encouragement_message(state).text == WILTING_LONG_TEXT

    def test_dead_plant(self):
        assert encouragement_message(make_state(health=10)) == DEAD_MESSAGE


def test_dto_copies_state_and_derives_projections():
    state = make_state(
        stage=PlantStage.PLANT,
        growth_points=11,
        total_entries=11,
        current_streak=3,
        longest_streak=6,
        last_entry_at=START,
        flowers=[Flower(type="rose", streak_at_award=3, awarded_at=START)],
    )
    dto = PlantStateDTO.from_domain(state)

    assert dto.stage == "plant"
    assert dto.stage_display_name == "Young Plant"
    assert dto.points_until_next_stage == 4
    assert dto.stage_progress == 50.0
    assert dto.visual_state == "healthy"
    assert dto.flowers[0].type == "rose"
    assert "3 days" in dto.streak_message
    assert dto.encouragement.title == HEALTHY_MESSAGES[PlantStage.PLANT].title


def test_dto_for_top_stage_has_no_next_threshold():
    dto = PlantStateDTO.from_domain(make_state(stage=PlantStage.FRUITING_TREE, growth_points=50))
    assert dto.points_until_next_stage is None
    assert dto.stage_progress == 100.0
