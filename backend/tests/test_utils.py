from analytics import DISPLAY_STATUSES
from app.utils import status_label


def test_status_label_covers_display_statuses():
    assert [status_label(status) for status in DISPLAY_STATUSES] == [
        status.capitalize() for status in DISPLAY_STATUSES
    ]
    assert status_label("failed") == "Failed"


def test_status_label_passes_unknown_statuses_through():
    assert status_label("refunded") == "refunded"
