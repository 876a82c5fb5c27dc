from pathlib import Path

import pytest

from sectordisk.geometry import (
    DiskConfig,
    build_platters,
    iter_sectors,
)


@pytest.fixture
def config():
    return DiskConfig("disk", 2, 2, 3, 2, 4, 128)


def test_sector_count_matches_config(tmp_path, config):
    sectors = list(iter_sectors(build_platters(tmp_path, config)))
    assert len(sectors) == config.total_sectors()


def test_sector_ids_are_consecutive_from_one(tmp_path, config):
    ids = [s.id for s in iter_sectors(build_platters(tmp_path, config))]
    assert ids == list(range(1, config.total_sectors() + 1))


def test_capacity_is_sum_of_sector_sizes(tmp_path, config):
    sectors = iter_sectors(build_platters(tmp_path, config))
    assert sum(s.size for s in sectors) == config.capacity()


def test_first_and_last_sector_paths(tmp_path, config):
    sectors = list(iter_sectors(build_platters(tmp_path, config)))
    assert sectors[0].path == (
        tmp_path / "disk" / "Plato1" / "Superficie1" / "Pista1" / "Bloque1" / "Sector1.txt"
    )
    assert sectors[-1].path == (
        tmp_path / "disk" / "Plato2" / "Superficie2" / "Pista3" / "Bloque2" / "Sector4.txt"
    )


def test_hierarchy_ids(tmp_path, config):
    platters = build_platters(tmp_path, config)
    assert [p.id for p in platters] == [1, 2]
    assert [s.id for s in platters[0].surfaces] == [1, 2]
    assert [t.id for t in platters[0].surfaces[0].tracks] == [1, 2, 3]
    assert [b.id for b in platters[1].surfaces[1].tracks[2].blocks] == [1, 2]


def test_build_does_not_create_files(tmp_path, config):
    build_platters(tmp_path, config)
    assert list(tmp_path.iterdir()) == []


def test_empty_disk_has_no_sectors(tmp_path):
    empty = DiskConfig("e", 0, 1, 1, 1, 1, 64)
    assert build_platters(tmp_path, empty) == ()
    assert empty.capacity() == 0


def test_config_line_round_trip(config):
    assert DiskConfig.from_line(config.to_line()) == config


def test_config_to_line_format():
    cfg = DiskConfig("d1", 1, 2, 3, 4, 5, 512)
    assert cfg.to_line() == "d1,1,2,3,4,5,512"


def test_config_from_line_with_newline():
    cfg = DiskConfig.from_line("d1,1,2,3,4,5,512\n")
    assert cfg == DiskConfig("d1", 1, 2, 3, 4, 5, 512)


def test_config_from_line_too_short():
    with pytest.raises(ValueError):
        DiskConfig.from_line("d1,1,2")


def test_config_from_line_not_numeric():
    with pytest.raises(ValueError):
        DiskConfig.from_line("d1,1,two,3,4,5,512")


def test_sector_paths_accept_string_root(tmp_path, config):
    first = next(iter_sectors(build_platters(str(tmp_path), config)))
    assert isinstance(first.path, Path)
    assert first.path.name == "Sector1.txt"