"""Tests for wsb.release.model."""

from wsb.release.model import Release, ResolvedLocator, parse_index, parse_release


class TestParseRelease:
    def test_prerelease(self) -> None:
        assert parse_release({"tag_name": "v2.1-pre", "prerelease": True}) == Release(
            tag="v2.1-pre", prerelease=True
        )

    def test_missing_prerelease_flag_is_stable(self) -> None:
        assert parse_release({"tag_name": "v2.0"}) == Release(tag="v2.0", prerelease=False)

    def test_missing_tag(self) -> None:
        assert parse_release({"prerelease": True}) is None

    def test_not_an_object(self) -> None:
        assert parse_release("v1.0") is None


def test_parse_index_keeps_order_and_skips_junk() -> None:
    index = parse_index(
        [
            {"tag_name": "b", "prerelease": False},
            42,
            {"name": "no tag"},
            {"tag_name": "a", "prerelease": True},
        ]
    )
    assert index == (Release("b", False), Release("a", True))


def test_locator_fallback_flag() -> None:
    assert ResolvedLocator(url="https://x/latest").is_fallback
    assert not ResolvedLocator(url="https://x/v1", tag="v1").is_fallback
