from pathlib import Path
from textwrap import dedent

import pytest

from ngupdate.config import ConfigError, load_config_from_path


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(content))


def test_load_ngupdate_toml(tmp_path: Path):
    # Arrange
    _write(
        tmp_path / "ngupdate.toml",
        """
        target = 9
        data = ["migrations/v9.yaml", "migrations/extra.yaml"]
        projects = "app"
        exclude = ["misc-template"]
        stylesheet_extensions = [".css", ".scss", ".less"]
        """,
    )

    # Act
    config = load_config_from_path(tmp_path)

    # Assert
    assert config.target == "9"
    assert config.data == ["migrations/v9.yaml", "migrations/extra.yaml"]
    assert config.projects == ["app"]
    assert config.exclude == ["misc-template"]
    assert config.stylesheet_extensions == [".css", ".scss", ".less"]
    assert config.root == tmp_path.resolve()


def test_load_from_pyproject_table_in_parent(tmp_path: Path):
    # Arrange
    _write(
        tmp_path / "pyproject.toml",
        """
        [project]
        name = "frontend-tools"

        [tool.ngupdate]
        target = "v10"
        data = "upgrade.yaml"
        """,
    )
    nested = tmp_path / "src" / "app"
    nested.mkdir(parents=True)

    # Act
    config = load_config_from_path(nested)

    # Assert
    assert config.target == "v10"
    assert config.data == ["upgrade.yaml"]
    assert config.stylesheet_extensions == [".css", ".scss"]
    assert config.root == tmp_path.resolve()


def test_ngupdate_toml_wins_over_pyproject_in_same_directory(tmp_path: Path):
    _write(tmp_path / "pyproject.toml", '[tool.ngupdate]\ntarget = "6"\n')
    _write(tmp_path / "ngupdate.toml", 'target = "11"\n')

    config = load_config_from_path(tmp_path)

    assert config.target == "11"


def test_pyproject_without_table_gives_defaults(tmp_path: Path):
    _write(tmp_path / "pyproject.toml", '[project]\nname = "other"\n')

    config = load_config_from_path(tmp_path)

    assert config.target is None
    assert config.data == []
    assert config.root is None


@pytest.mark.parametrize(
    "content",
    [
        "target = [1, 2]\n",
        "data = 5\n",
        'exclude = ["a", 1]\n',
        "target = \n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str):
    _write(tmp_path / "ngupdate.toml", content)

    with pytest.raises(ConfigError):
        load_config_from_path(tmp_path)
