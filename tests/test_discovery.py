"""Tests for spawn candidate discovery."""

from agentfleet.agents import listing_limit, select_candidates

from conftest import make_record, make_token


def test_offset_skips_top_tokens():
    tokens = [make_token(i) for i in range(6)]
    picked = select_candidates(tokens, [], offset=2, count=10)
    assert [t.mint for t in picked] == ["mint2", "mint3", "mint4", "mint5"]


def test_truncates_to_count_in_listing_order():
    tokens = [make_token(i) for i in range(5)]
    picked = select_candidates(tokens, [], offset=0, count=3)
    assert [t.mint for t in picked] == ["mint0", "mint1", "mint2"]


def test_known_mint_excluded_even_with_new_name():
    """A token whose mint already has an agent is never a candidate."""
    tokens = [make_token(1), make_token(2)]
    existing = [make_record(9, mint="mint1", name="Totally Different")]

    picked = select_candidates(tokens, existing, offset=0, count=5)
    assert [t.mint for t in picked] == ["mint2"]


def test_known_name_excluded_case_insensitive():
    tokens = [make_token(1, name="DOGE Killer"), make_token(2)]
    existing = [make_record(9, name="doge killer")]

    picked = select_candidates(tokens, existing, offset=0, count=5)
    assert [t.mint for t in picked] == ["mint2"]


def test_tokens_without_fetchable_image_excluded():
    tokens = [
        make_token(1, image_uri=None),
        make_token(2, image_uri=""),
        make_token(3, image_uri="ipfs://bafy123"),
        make_token(4, image_uri="http://img.example/4.png"),
        make_token(5),
    ]
    picked = select_candidates(tokens, [], offset=0, count=5)
    assert [t.mint for t in picked] == ["mint4", "mint5"]


def test_filters_apply_after_offset():
    """Offset counts raw listing entries, including ones filtered later."""
    tokens = [make_token(0, image_uri=None), make_token(1), make_token(2), make_token(3)]
    existing = [make_record(9, mint="mint2")]

    picked = select_candidates(tokens, existing, offset=1, count=5)
    assert [t.mint for t in picked] == ["mint1", "mint3"]


def test_count_applies_after_filters():
    tokens = [make_token(1, image_uri=None), make_token(2), make_token(3), make_token(4)]
    picked = select_candidates(tokens, [], offset=0, count=2)
    assert [t.mint for t in picked] == ["mint2", "mint3"]


def test_selection_is_deterministic():
    tokens = [make_token(i) for i in range(10)]
    existing = [make_record(1, mint="mint4"), make_record(2, name="token 6")]
    snapshot = list(tokens)

    first = select_candidates(tokens, existing, offset=1, count=4)
    second = select_candidates(tokens, existing, offset=1, count=4)

    assert first == second
    assert [t.mint for t in first] == ["mint1", "mint2", "mint3", "mint5"]
    assert tokens == snapshot


def test_offset_past_end_yields_nothing():
    assert select_candidates([make_token(1)], [], offset=30, count=5) == []


def test_listing_limit_leaves_room_for_filters():
    assert listing_limit(30, 5) == 45
    assert listing_limit(0, 3) == 9
