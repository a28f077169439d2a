import pytest

from iris_sdk import NOT_FOUND, InvalidPath, get_path, merge_updates, set_path


def test_get_nested_key_and_index():
    root = {"components": [{"props": {"title": "A"}}, {"props": {"title": "B"}}]}
    assert get_path(root, "components.1.props.title") == "B"
    assert get_path(root, "components.0") == {"props": {"title": "A"}}


def test_get_missing_values_are_not_found():
    root = {"a": {"b": 1}, "items": [1, 2]}
    assert get_path(root, "a.c") is NOT_FOUND
    assert get_path(root, "x.y.z") is NOT_FOUND
    assert get_path(root, "items.5") is NOT_FOUND
    assert get_path(root, "items.first") is NOT_FOUND
    assert not NOT_FOUND


def test_get_distinguishes_none_from_missing():
    assert get_path({"a": None}, "a") is None
    assert get_path({}, "a") is NOT_FOUND


def test_get_through_null_is_not_found():
    root = {"theme": None, "components": [None]}
    assert get_path(root, "theme.mode") is NOT_FOUND
    assert get_path(root, "components.0.props") is NOT_FOUND


def test_get_through_scalar_is_invalid():
    with pytest.raises(InvalidPath):
        get_path({"a": 5}, "a.b")


@pytest.mark.parametrize("path", ["", "a..b", ".a", "a."])
def test_malformed_paths_rejected(path):
    with pytest.raises(InvalidPath):
        get_path({"a": {"b": 1}}, path)
    with pytest.raises(InvalidPath):
        set_path({}, path, 1)


def test_set_auto_creates_mappings():
    root = {}
    result = set_path(root, "a.b.c", 5)
    assert result is root
    assert root == {"a": {"b": {"c": 5}}}


def test_set_replaces_null_intermediate():
    root = {"theme": None}
    set_path(root, "theme.mode", "dark")
    assert root == {"theme": {"mode": "dark"}}


def test_set_list_index():
    root = {"items": [{"x": 1}, {"x": 2}]}
    set_path(root, "items.1.x", 9)
    assert root["items"][1]["x"] == 9
    set_path(root, "items.0", "replaced")
    assert root["items"][0] == "replaced"


def test_set_never_extends_lists():
    with pytest.raises(InvalidPath):
        set_path({"items": [1]}, "items.5.x", 9)
    with pytest.raises(InvalidPath):
        set_path({"items": [1]}, "items.1", 9)


@pytest.mark.parametrize("segment", ["-1", "x", "1a"])
def test_set_rejects_non_index_segments_on_lists(segment):
    with pytest.raises(InvalidPath):
        set_path({"items": [{"x": 1}, {"x": 2}]}, f"items.{segment}", 0)


def test_set_through_scalar_is_invalid():
    with pytest.raises(InvalidPath) as info:
        set_path({"a": "text"}, "a.b", 1)
    assert info.value.path == "a.b"


def test_set_then_get_returns_value():
    root = {"components": [{"props": {}}]}
    for path, value in [("components.0.props.title", "Hi"), ("meta.tags", ["x"]), ("flag", False)]:
        set_path(root, path, value)
        assert get_path(root, path) == value


def test_merge_updates_is_single_level():
    target = {"props": {"title": "A", "subtitle": "B", "style": {"color": "red", "size": 1}}}
    result = merge_updates(target, {"props": {"title": "Z", "style": {"color": "blue"}}})
    assert result["props"]["title"] == "Z"
    assert result["props"]["subtitle"] == "B"
    # nested mappings below the first level are replaced, not merged
    assert result["props"]["style"] == {"color": "blue"}


def test_merge_updates_dotted_keys_and_replacement():
    target = {"type": "Hero", "props": {"title": "A"}, "tags": ["a"]}
    result = merge_updates(target, {"props.subtitle": "S", "tags": ["b"], "id": "hero-1"})
    assert result == {"type": "Hero", "props": {"title": "A", "subtitle": "S"}, "tags": ["b"], "id": "hero-1"}


def test_merge_updates_does_not_mutate_target():
    target = {"props": {"title": "A"}}
    merge_updates(target, {"props.title": "B", "props": {"x": 1}})
    assert target == {"props": {"title": "A"}}
