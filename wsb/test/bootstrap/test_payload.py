"""Tests for wsb.bootstrap.payload."""

from __future__ import annotations

from pathlib import Path

from wsb.bootstrap.payload import Payload, PresetArgument, augment_with_preset, preset_suffix


def test_preset_suffix_format() -> None:
    assert preset_suffix("-CustomPreset", Path("/cfg/preset.json")) == (
        '-CustomPreset "/cfg/preset.json"'
    )


class TestAugmentWithPreset:
    def test_absent_preset_is_byte_identical(self, tmp_path: Path) -> None:
        payload = Payload(script="irm | iex\r\n# ünïcode\n")

        result = augment_with_preset(payload, tmp_path / "preset.json", "-CustomPreset")

        assert result is payload
        assert result.text.encode("utf-8") == payload.text.encode("utf-8")
        assert not result.augmented

    def test_present_preset_appends_suffix(self, tmp_path: Path) -> None:
        preset = tmp_path / "preset.json"
        preset.write_text("{}", encoding="utf-8")

        result = augment_with_preset(Payload(script="& $script"), preset, "-CustomPreset")

        assert result.text == f'& $script -CustomPreset "{preset}"'
        assert result.text.endswith(f'-CustomPreset "{preset}"')
        assert result.augmented

    def test_suffix_appended_at_most_once(self, tmp_path: Path) -> None:
        preset = tmp_path / "preset.json"
        preset.write_text("{}", encoding="utf-8")

        once = augment_with_preset(Payload(script="x"), preset, "-CustomPreset")
        twice = augment_with_preset(once, preset, "-CustomPreset")

        assert twice.text.count("-CustomPreset") == 1

    def test_repeated_runs_do_not_accumulate(self, tmp_path: Path) -> None:
        preset = tmp_path / "preset.json"
        preset.write_text("{}", encoding="utf-8")
        original = Payload(script="x")

        first = augment_with_preset(original, preset, "-CustomPreset")
        second = augment_with_preset(original, preset, "-CustomPreset")

        assert first == second
        assert original.text == "x"

    def test_preset_is_not_read(self, tmp_path: Path) -> None:
        preset = tmp_path / "preset.json"
        preset.write_bytes(b"\xff\xfe not json")

        result = augment_with_preset(Payload(script="x"), preset, "-Config")

        assert result.text == f'x -Config "{preset}"'


class TestPayload:
    def test_preset_travels_as_separate_arguments(self) -> None:
        payload = Payload(script="param($CustomPreset)").with_preset(
            PresetArgument("-CustomPreset", Path("/cfg/my preset.json"))
        )

        assert payload.script == "param($CustomPreset)"
        assert payload.args == ("-CustomPreset", str(Path("/cfg/my preset.json")))
        assert payload.text.endswith(f'-CustomPreset "{Path("/cfg/my preset.json")}"')

    def test_plain_payload_has_no_args(self) -> None:
        payload = Payload(script="x")

        assert payload.args == ()
        assert payload.text == "x"
        assert not payload.augmented
