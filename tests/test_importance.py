import pytest

from timegrid.importance import Importance, color_key, display_label, normalize_importance, storage_label


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, Importance.NONE),
        (1, Importance.LOW),
        (2, Importance.MEDIUM),
        (3, Importance.HIGH),
        (2.0, Importance.MEDIUM),
        ("HIGH", Importance.HIGH),
        ("medium", Importance.MEDIUM),
        (" Low ", Importance.LOW),
        ("NONE", Importance.NONE),
        ("urgent", Importance.NONE),
        (7, Importance.NONE),
        (99, Importance.NONE),
        (1.5, Importance.NONE),
        (True, Importance.NONE),
        (None, Importance.NONE),
        ([], Importance.NONE),
    ],
)
def test_normalize_importance(raw, expected):
    assert normalize_importance(raw) is expected


def test_labels_and_colors():
    assert display_label(Importance.NONE) == ""
    assert display_label(Importance.MEDIUM) == "Medium"
    assert color_key(Importance.NONE) == "gray"
    assert color_key(Importance.LOW) == "blue"
    assert color_key(Importance.MEDIUM) == "yellow"
    assert color_key(Importance.HIGH) == "red"


def test_storage_label_is_canonical_name():
    assert storage_label(3) == "HIGH"
    assert storage_label("low") == "LOW"
    assert storage_label("nonsense") == "NONE"
