"""Unit tests for Picasa.ini parsing."""

import pytest

from mediameta.metadata.picasa import find_sidecar, parse_picasa_ini, sidecar_for_file
from mediameta.models.sidecar import LegacySidecar

PICASA_INI = """\ufeff[Picasa]
name=Holidays

[IMG_0001.jpg]
caption=Sunset over the bay, 100% orange
keywords=beach,sunset
star=yes

[IMG_0002.JPG]
keywords=harbour
"""


class TestParsePicasaIni:
    """Test parsing Picasa.ini content."""

    def test_parse_sections(self):
        """Should produce one sidecar per image section."""
        sidecars = parse_picasa_ini(PICASA_INI)

        assert set(sidecars) == {"IMG_0001.jpg", "IMG_0002.JPG"}
        assert sidecars["IMG_0001.jpg"] == LegacySidecar(
            caption="Sunset over the bay, 100% orange",
            keywords="beach,sunset",
            star="yes",
        )
        assert sidecars["IMG_0002.JPG"] == LegacySidecar(keywords="harbour")

    def test_empty_file(self):
        """Should return no sidecars for empty content."""
        assert parse_picasa_ini("") == {}

    def test_invalid_content(self):
        """Should raise ValueError for content outside any section."""
        with pytest.raises(ValueError):
            parse_picasa_ini("caption=orphan\n")


class TestFindSidecar:
    """Test looking up a file's sidecar."""

    def test_exact_match(self):
        """Should find a sidecar by exact name."""
        sidecars = parse_picasa_ini(PICASA_INI)

        assert find_sidecar(sidecars, "IMG_0001.jpg").star == "yes"

    def test_case_insensitive_match(self):
        """Should fall back to a case-insensitive match."""
        sidecars = parse_picasa_ini(PICASA_INI)

        assert find_sidecar(sidecars, "img_0002.jpg").keywords == "harbour"

    def test_no_match(self):
        """Should return None for files without annotations."""
        assert find_sidecar(parse_picasa_ini(PICASA_INI), "IMG_0003.jpg") is None


class TestSidecarForFile:
    """Test scoping a Picasa.ini to its own folder."""

    def test_file_in_folder(self, tmp_path):
        """Should annotate files next to the Picasa.ini."""
        sidecars = parse_picasa_ini(PICASA_INI)

        sidecar = sidecar_for_file(sidecars, tmp_path, tmp_path / "IMG_0001.jpg")

        assert sidecar.caption == "Sunset over the bay, 100% orange"

    def test_same_name_in_subfolder(self, tmp_path):
        """Should not annotate a same-named file in a subfolder."""
        sidecars = parse_picasa_ini(PICASA_INI)

        assert sidecar_for_file(sidecars, tmp_path, tmp_path / "2019" / "IMG_0001.jpg") is None

    def test_relative_paths(self, tmp_path, monkeypatch):
        """Should compare relative paths from the current directory."""
        monkeypatch.chdir(tmp_path)
        sidecars = parse_picasa_ini(PICASA_INI)

        assert sidecar_for_file(sidecars, ".", "IMG_0001.jpg").star == "yes"
        assert sidecar_for_file(sidecars, ".", "2019/IMG_0001.jpg") is None
