import pytest

from jewelcase.models.dimensions import PanelId
from jewelcase.models.project_state import create_default_project_state
from jewelcase.services import spine_sync
from jewelcase.services.project_editor import (
    attach_asset, fail_asset, set_sync_enabled, update_image, update_offset,
)

FRONT = PanelId.FRONT_COVER
LEFT = PanelId.LEFT_SPINE
BACK = PanelId.BACK_CENTER
RIGHT = PanelId.RIGHT_SPINE


def loaded(state, panel_id, asset):
    state = update_image(state, panel_id, asset.source_url)
    return attach_asset(state, panel_id, asset)


# ── Defaults ────────────────────────────────────────────────────────────────

def test_default_state_is_empty():
    state = create_default_project_state()
    assert not state.sync_enabled
    for panel in state.panels():
        assert panel.part.image_url is None
        assert not panel.part.is_renderable
        assert panel.part.id == panel.panel_id.value
    assert state.part(LEFT).name == "Left Spine"


# ── Image and asset edits ───────────────────────────────────────────────────

def test_update_image_replaces_part_and_keeps_others():
    state = create_default_project_state()
    new = update_image(state, FRONT, "a.png")
    assert new is not state
    assert new.part(FRONT).image_url == "a.png"
    assert new.part(FRONT).asset is None
    assert new.back_center is state.back_center


def test_update_image_none_clears(make_asset):
    state = loaded(create_default_project_state(), FRONT, make_asset(url="a.png"))
    cleared = update_image(state, FRONT, None)
    assert cleared.part(FRONT).image_url is None
    assert not cleared.part(FRONT).is_renderable


def test_attach_asset_fits_and_centers_cover(make_asset):
    state = loaded(create_default_project_state(), FRONT, make_asset(800, 600, "a.png"))
    part = state.part(FRONT)
    assert part.scale == pytest.approx(0.76)
    assert part.x == pytest.approx(-76)
    assert part.y == pytest.approx(0)


def test_attach_asset_fits_and_centers_strip(make_asset):
    state = loaded(create_default_project_state(), BACK, make_asset(1000, 500, "b.png"))
    part = state.part(BACK)
    assert part.scale == pytest.approx(0.888)
    assert part.x == pytest.approx(-185)
    assert part.y == 0


def test_attach_stale_asset_is_dropped(make_asset):
    state = update_image(create_default_project_state(), FRONT, "new.png")
    same = attach_asset(state, FRONT, make_asset(url="old.png"))
    assert same is state


def test_fail_asset_reverts_to_empty():
    state = update_image(create_default_project_state(), FRONT, "broken.png")
    reverted = fail_asset(state, FRONT, "broken.png")
    assert reverted.part(FRONT).image_url is None
    # a failure for a superseded URL changes nothing
    state = update_image(reverted, FRONT, "ok.png")
    assert fail_asset(state, FRONT, "broken.png") is state


# ── Offsets ─────────────────────────────────────────────────────────────────

def test_update_offset_clamps(make_asset):
    state = loaded(create_default_project_state(), FRONT, make_asset(800, 600, "a.png"))
    moved = update_offset(state, FRONT, 100, 100)
    assert (moved.part(FRONT).x, moved.part(FRONT).y) == (0, 0)
    moved = update_offset(state, FRONT, -1000, -1000)
    assert moved.part(FRONT).x == pytest.approx(456 - 608)
    assert moved.part(FRONT).y == pytest.approx(0)


def test_update_offset_pins_strip_vertically(make_asset):
    state = loaded(create_default_project_state(), BACK, make_asset(1000, 500, "b.png"))
    moved = update_offset(state, BACK, -20, -30)
    assert (moved.part(BACK).x, moved.part(BACK).y) == (-20, 0)


def test_update_offset_without_asset_is_a_no_op():
    state = update_image(create_default_project_state(), FRONT, "pending.png")
    assert update_offset(state, FRONT, -5, -5) is state


# ── Spine sync ──────────────────────────────────────────────────────────────

def test_enable_sync_copies_left_spine_immediately(make_asset):
    state = loaded(create_default_project_state(), LEFT, make_asset(100, 400, "spine.png"))
    state = update_offset(state, LEFT, -60, 0)
    synced = set_sync_enabled(state, True)

    assert synced.sync_enabled
    left, right = synced.part(LEFT), synced.part(RIGHT)
    assert right.image_url == left.image_url
    assert right.asset is left.asset
    assert (right.x, right.y, right.scale) == (left.x, left.y, left.scale)
    # identity stays with the right spine
    assert (right.id, right.name) == ("right-spine", "Right Spine")
    assert spine_sync.is_mirrored(synced)


def test_left_edits_follow_while_synced(make_asset):
    state = set_sync_enabled(create_default_project_state(), True)
    asset = make_asset(100, 400, "spine.png")

    edits = [
        lambda s: update_image(s, LEFT, "spine.png"),
        lambda s: attach_asset(s, LEFT, asset),
        lambda s: update_offset(s, LEFT, -10, 0),
        lambda s: update_offset(s, LEFT, -70, 5),
    ]
    for edit in edits:
        state = edit(state)
        assert state.part(RIGHT).image_url == state.part(LEFT).image_url
        assert (state.part(RIGHT).x, state.part(RIGHT).y) == (state.part(LEFT).x, state.part(LEFT).y)
        assert spine_sync.is_mirrored(state)


def test_right_spine_edits_ignored_while_synced(make_asset):
    state = set_sync_enabled(create_default_project_state(), True)
    assert update_image(state, RIGHT, "other.png") is state
    assert attach_asset(state, RIGHT, make_asset(url="other.png")) is state
    assert update_offset(state, RIGHT, -1, 0) is state


def test_disable_sync_keeps_mirrored_content(make_asset):
    state = loaded(create_default_project_state(), LEFT, make_asset(100, 400, "spine.png"))
    synced = set_sync_enabled(state, True)
    unsynced = set_sync_enabled(synced, False)
    assert not unsynced.sync_enabled
    assert unsynced.right_spine is synced.right_spine

    # right spine is independent again
    moved = update_offset(unsynced, RIGHT, -80, 0)
    assert moved.part(RIGHT).x != moved.part(LEFT).x


def test_edits_while_unsynced_never_touch_right_spine(make_asset):
    state = create_default_project_state()
    right = state.right_spine
    state = loaded(state, LEFT, make_asset(100, 400, "spine.png"))
    state = update_offset(state, LEFT, -30, 0)
    assert state.right_spine is right


def test_set_sync_enabled_same_value_is_a_no_op():
    state = create_default_project_state()
    assert set_sync_enabled(state, False) is state
