import pytest

from deskkit.memory import (
    ram_free,
    ram_perc,
    ram_total,
    ram_used,
    swap_free,
    swap_perc,
    swap_total,
    swap_used,
)


def meminfo(tmp_path, name="meminfo", total=1000, free=100, available=700,
            buffers=100, cached=300, swap_total_kb=1000, swap_free_kb=400,
            swap_cached_kb=100):
    path = tmp_path / name
    path.write_text(
        f"MemTotal:       {total} kB\n"
        f"MemFree:        {free} kB\n"
        f"MemAvailable:   {available} kB\n"
        f"Buffers:        {buffers} kB\n"
        f"Cached:         {cached} kB\n"
        f"SwapCached:     {swap_cached_kb} kB\n"
        f"Active:         10 kB\n"
        f"SwapTotal:      {swap_total_kb} kB\n"
        f"SwapFree:       {swap_free_kb} kB\n"
    )
    return str(path)


def test_ram_perc(tmp_path):
    assert ram_perc(meminfo(tmp_path)) == "50"


def test_ram_perc_stays_in_range(tmp_path):
    value = int(ram_perc(meminfo(tmp_path, free=0, buffers=0, cached=0)))
    assert 0 <= value <= 100


def test_ram_perc_zero_total(tmp_path):
    assert ram_perc(meminfo(tmp_path, total=0, free=0, buffers=0, cached=0)) is None


def test_ram_free_is_available_memory(tmp_path):
    assert ram_free(meminfo(tmp_path, available=1000)) == ram_total(meminfo(tmp_path, "b"))


def test_ram_used_equals_total_when_nothing_free(tmp_path):
    path = meminfo(tmp_path, free=0, buffers=0, cached=0)
    assert ram_used(path) == ram_total(path)


def test_ram_total_unit(tmp_path):
    assert ram_total(meminfo(tmp_path, total=1048576)).endswith(" Gi")


def test_ram_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "absent")
    assert ram_total(missing) is None
    assert ram_free(missing) is None
    assert "fopen" in capsys.readouterr().err


def test_ram_incomplete_file(tmp_path):
    path = tmp_path / "short"
    path.write_text("MemTotal: 1000 kB\nMemFree: 100 kB\n")
    assert ram_total(str(path)) is not None and ram_free(str(path)) is None
    assert ram_used(str(path)) is None


def test_swap_perc_nothing_used(tmp_path):
    assert swap_perc(meminfo(tmp_path, swap_free_kb=1000, swap_cached_kb=0)) == "0"


def test_swap_perc_all_used(tmp_path):
    assert swap_perc(meminfo(tmp_path, swap_free_kb=0, swap_cached_kb=0)) == "100"


def test_swap_perc_without_swap(tmp_path):
    path = meminfo(tmp_path, swap_total_kb=0, swap_free_kb=0, swap_cached_kb=0)
    assert swap_perc(path) is None


def test_swap_free_equals_total_when_unused(tmp_path):
    path = meminfo(tmp_path, swap_total_kb=2048, swap_free_kb=2048)
    assert swap_free(path) == swap_total(path)


def test_swap_used_equals_total_when_full(tmp_path):
    path = meminfo(tmp_path, swap_total_kb=2048, swap_free_kb=0, swap_cached_kb=0)
    assert swap_used(path) == swap_total(path)


def test_swap_cache_counts_as_free(tmp_path):
    cached = meminfo(tmp_path, "a", swap_free_kb=400, swap_cached_kb=100)
    plain = meminfo(tmp_path, "b", swap_free_kb=500, swap_cached_kb=0)
    assert swap_used(cached) == swap_used(plain)
    assert swap_perc(cached) == swap_perc(plain)


def test_swap_missing_field(tmp_path):
    path = tmp_path / "noswap"
    path.write_text("MemTotal: 1000 kB\n")
    assert swap_total(str(path)) is None


@pytest.mark.parametrize("func", [swap_free, swap_perc, swap_total, swap_used])
def test_swap_missing_file(tmp_path, func):
    assert func(str(tmp_path / "absent")) is None