from __future__ import annotations

import time
from pathlib import Path

import pytest

from catalog_lint import pipeline as pipeline_module
from catalog_lint.errors import DiscoveryError
from catalog_lint.models.reports import ParseErrorKind
from catalog_lint.pipeline import has_failures, run


def _build_mixed_catalog(root: Path, agent_writer, skill_writer) -> Path:
    for index in range(5):
        agent_writer(root, f"agents/team/helper-{index}.agent.md")
    for index in range(4):
        skill_writer(root, f"skills/topic/skill-{index}")
    broken = root / "agents/team/broken.agent.md"
    broken.write_text("# No metadata block\n\nJust prose.\n", encoding="utf-8")
    return broken


def test_one_malformed_file_does_not_stop_the_run(tmp_path: Path, agent_writer, skill_writer) -> None:
    broken = _build_mixed_catalog(tmp_path, agent_writer, skill_writer)

    report = run(tmp_path)

    assert report.checked_files == 10
    assert len(report.results) == 10
    assert sum(1 for item in report.results if item.passed) == 9
    failing = [item for item in report.results if not item.passed]
    assert len(failing) == 1
    assert failing[0].path == str(broken.resolve())
    assert failing[0].parse_error == ParseErrorKind.MISSING_BLOCK
    assert failing[0].rule_ids() == ["MissingBlock"]
    assert report.summary == {"passed": 9, "failed": 1, "violations": 1, "warnings": 0}


def test_run_is_idempotent_and_ordered(catalog_root: Path) -> None:
    first = run(catalog_root, jobs=1)
    second = run(catalog_root, jobs=4)

    assert first.results == second.results
    paths = [item.path for item in first.results]
    assert paths == sorted(paths)


def test_malformed_yaml_is_recorded_per_file(tmp_path: Path, agent_writer) -> None:
    agent_writer(tmp_path, "agents/good.agent.md")
    bad = tmp_path / "agents/bad.agent.md"
    bad.write_text("---\ndescription: 'unterminated\n---\n", encoding="utf-8")

    report = run(tmp_path)

    by_name = {Path(item.path).name: item for item in report.results}
    assert by_name["good.agent.md"].passed
    assert by_name["bad.agent.md"].parse_error == ParseErrorKind.MALFORMED_BLOCK
    assert by_name["bad.agent.md"].rule_ids() == ["MalformedBlock"]


def test_undecodable_file_fails_with_discovery_error(tmp_path: Path, agent_writer) -> None:
    agent_writer(tmp_path, "agents/good.agent.md")
    (tmp_path / "agents/binary.agent.md").write_bytes(b"\xff\xfe\x00\x81garbage")

    report = run(tmp_path)

    by_name = {Path(item.path).name: item for item in report.results}
    assert by_name["binary.agent.md"].rule_ids() == ["DiscoveryError"]
    assert by_name["good.agent.md"].passed


def test_read_timeout_fails_only_that_file(tmp_path: Path, agent_writer, monkeypatch) -> None:
    agent_writer(tmp_path, "agents/fast.agent.md")
    agent_writer(tmp_path, "agents/slow.agent.md")
    original = pipeline_module.read_document

    def _slow_read(path: Path) -> str:
        if path.name == "slow.agent.md":
            time.sleep(2.0)
        return original(path)

    monkeypatch.setattr(pipeline_module, "read_document", _slow_read)

    started = time.monotonic()
    report = run(tmp_path, read_timeout_s=0.05)
    elapsed = time.monotonic() - started

    by_name = {Path(item.path).name: item for item in report.results}
    assert by_name["fast.agent.md"].passed
    assert by_name["slow.agent.md"].rule_ids() == ["DiscoveryError"]
    assert "Timed out" in by_name["slow.agent.md"].violations[0].message
    assert elapsed < 1.0


def test_oversized_asset_fails_skill(tmp_path: Path, skill_writer) -> None:
    skill = skill_writer(tmp_path, "skills/big-skill", body="See data.bin\n")
    (skill.parent / "data.bin").write_bytes(b"x" * 64)

    report = run(tmp_path, max_asset_bytes=32)

    assert report.results[0].rule_ids() == ["AssetTooLarge"]


def test_missing_root_propagates(tmp_path: Path) -> None:
    with pytest.raises(DiscoveryError):
        run(tmp_path / "nope")


def test_has_failures_strict_counts_warnings(tmp_path: Path, agent_writer) -> None:
    agent_writer(tmp_path, "agents/bare.agent.md", extra="")

    report = run(tmp_path)

    assert report.passed
    assert report.summary["warnings"] == 2
    assert not has_failures(report)
    assert has_failures(report, strict=True)


def test_run_reads_through_shared_reader(tmp_path: Path, agent_writer, skill_writer, monkeypatch) -> None:
    agent_writer(tmp_path, "agents/helper.agent.md")
    skill_writer(tmp_path, "skills/demo-skill")
    original = pipeline_module.read_document
    seen: list[str] = []

    def _recording_read(path: Path) -> str:
        seen.append(path.name)
        return original(path)

    monkeypatch.setattr(pipeline_module, "read_document", _recording_read)

    report = run(tmp_path)

    assert report.passed
    assert sorted(seen) == ["SKILL.md", "helper.agent.md"]


def test_oversized_asset_under_dist_folder_fails_skill(tmp_path: Path, skill_writer) -> None:
    skill = skill_writer(tmp_path, "skills/packager", body="Ships dist/bundle.zip\n")
    (skill.parent / "dist").mkdir()
    (skill.parent / "dist" / "bundle.zip").write_bytes(b"x" * 64)

    report = run(tmp_path, max_asset_bytes=32)

    assert report.results[0].rule_ids() == ["AssetTooLarge"]
