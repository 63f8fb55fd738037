import pytest

from deskkit.power import battery_perc, battery_remaining, battery_state


@pytest.fixture
def root(tmp_path):
    (tmp_path / "BAT0").mkdir()
    return tmp_path


def write(root, name, text):
    (root / "BAT0" / name).write_text(text)


def test_perc_reads_capacity(root):
    write(root, "capacity", "87\n")
    assert battery_perc("BAT0", str(root)) == "87"


def test_perc_missing_file(root, capsys):
    assert battery_perc("BAT0", str(root)) is None
    assert "fopen" in capsys.readouterr().err


def test_perc_unparsable(root):
    write(root, "capacity", "full\n")
    assert battery_perc("BAT0", str(root)) is None


@pytest.mark.parametrize(
    "status, symbol",
    [
        ("Charging\n", "+"),
        ("Discharging\n", "-"),
        ("Full\n", "o"),
        ("Not charging\n", "o"),
        ("Unknown\n", "?"),
    ],
)
def test_state_symbols(root, status, symbol):
    write(root, "status", status)
    assert battery_state("BAT0", str(root)) == symbol


def test_state_empty_file(root):
    write(root, "status", "")
    assert battery_state("BAT0", str(root)) is None


def test_remaining_empty_when_charging(root):
    write(root, "status", "Charging\n")
    write(root, "charge_now", "5000\n")
    assert battery_remaining("BAT0", str(root)) == ""


def test_remaining_when_discharging(root):
    write(root, "status", "Discharging\n")
    write(root, "charge_now", "5000\n")
    write(root, "current_now", "2000\n")
    assert battery_remaining("BAT0", str(root)) == "2h 30m"


def test_remaining_falls_back_to_energy_and_power(root):
    write(root, "status", "Discharging\n")
    write(root, "energy_now", "4000\n")
    write(root, "power_now", "4000\n")
    assert battery_remaining("BAT0", str(root)) == "1h 0m"


def test_remaining_zero_current(root):
    write(root, "status", "Discharging\n")
    write(root, "charge_now", "5000\n")
    write(root, "current_now", "0\n")
    assert battery_remaining("BAT0", str(root)) is None


def test_remaining_without_charge_file(root):
    write(root, "status", "Discharging\n")
    write(root, "current_now", "2000\n")
    assert battery_remaining("BAT0", str(root)) is None


def test_remaining_without_current_file(root):
    write(root, "status", "Discharging\n")
    write(root, "charge_now", "5000\n")
    assert battery_remaining("BAT0", str(root)) is None