from pathlib import Path

import pytest

from dirsummary.config import AnalyzeConfig


def write_config(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_default_file_gives_no_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert AnalyzeConfig.load_defaults() == {}


def test_missing_named_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = AnalyzeConfig.load_defaults(tmp_path / "custom.yaml")


def test_build_without_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    cfg = AnalyzeConfig.build(
        directory=tmp_path,
        output=None,
        skip_folders=[".git"],
        quiet=False,
    )

    assert cfg == AnalyzeConfig(directory=tmp_path, output=None, skip_folders=[".git"], show_tree=True)


def test_build_merges_defaults(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path / "defaults.yaml",
        "config:\n  skip_folders: [target, node_modules]\n  output: report.yaml\n  show_tree: false\n",
    )

    cfg = AnalyzeConfig.build(
        directory=tmp_path,
        output=None,
        skip_folders=[".git"],
        quiet=False,
        config_path=config_path,
    )

    assert cfg.skip_folders == ["target", "node_modules", ".git"]
    assert cfg.output == Path("report.yaml")
    assert cfg.show_tree is False


def test_command_line_output_and_quiet_win(tmp_path: Path) -> None:
    config_path = write_config(tmp_path / "defaults.yaml", "config:\n  output: report.yaml\n")

    cfg = AnalyzeConfig.build(
        directory=tmp_path,
        output=tmp_path / "other.yaml",
        skip_folders=[],
        quiet=True,
        config_path=config_path,
    )

    assert cfg.output == tmp_path / "other.yaml"
    assert cfg.show_tree is False


def test_save_then_load_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "dirsummary.yaml"
    AnalyzeConfig(directory=tmp_path, output=Path("out.yaml"), skip_folders=["target"]).save(config_path)

    assert AnalyzeConfig.load_defaults(config_path) == {
        "skip_folders": ["target"],
        "output": "out.yaml",
        "show_tree": True,
    }


def test_empty_config_file(tmp_path: Path) -> None:
    config_path = write_config(tmp_path / "dirsummary.yaml", "")

    with pytest.raises(ValueError):
        _ = AnalyzeConfig.load_defaults(config_path)


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "other: 1\n",
        "config:\n  skip_folders: target\n",
        "config:\n  skip_folders: [1, 2]\n",
        "config:\n  output: 3\n",
        "config:\n  show_tree: maybe\n",
    ],
)
def test_malformed_config_file(tmp_path: Path, text: str) -> None:
    config_path = write_config(tmp_path / "dirsummary.yaml", text)

    with pytest.raises(TypeError):
        _ = AnalyzeConfig.load_defaults(config_path)
