"""
Unit Tests for roadmap step aggregation
"""
from syllabus_hub.schemas.roadmap import RoadmapStepCreate
from syllabus_hub.services.roadmap_service import total_estimated_hours


def _step(hours: float) -> RoadmapStepCreate:
    return RoadmapStepCreate(title="Step", description="Do the thing", estimated_hours=hours)


class TestTotalEstimatedHours:

    def test_sums_fractional_hours(self):
        assert total_estimated_hours([_step(2), _step(3.5)]) == 5.5

    def test_single_step(self):
        assert total_estimated_hours([_step(0.5)]) == 0.5

    def test_returns_float(self):
        assert isinstance(total_estimated_hours([_step(1), _step(2)]), float)
