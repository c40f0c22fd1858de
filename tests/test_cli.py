"""
Command-line tests.
"""

import pytest

from pnra.pnra import main


@pytest.fixture
def net_file(tmp_path):
    path = tmp_path / "demo.net"
    path.write_text("net demo\ntr t0 p0 -> p1*2\ntr t1 p1*2 -> p0\npl p0 (1)\n")
    return str(path)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "source.net"
    path.write_text("net source\ntr t0 -> p0\n")
    return str(path)


def test_report(net_file, capsys):
    main(['-n', net_file])
    out = capsys.readouterr().out

    assert out.startswith("T0 ... t0\nT1 ... t1\n\n")
    assert "M000   1    0    T0->M001\n" in out
    assert "M001   0    2    T1->M000\n" in out
    assert "Boundedness: 2-Bounded\n" in out
    assert out.endswith("Sound: true\n")


def test_capacities(net_file, capsys):
    main(['-n', net_file, '--capacities', 'p1=1'])
    out = capsys.readouterr().out

    assert "M000: deadlock\n" in out
    assert "Sound: false\n" in out


def test_unknown_capacity_place(net_file):
    with pytest.raises(SystemExit) as e:
        main(['-n', net_file, '--capacities', 'p9=1'])
    assert e.value.code == 2


def test_incidence_matrix(net_file, capsys):
    main(['-n', net_file, '--show-incidence-matrix'])
    out = capsys.readouterr().out

    assert "# P0 -1 1\n# P1 2 -2\n" in out


def test_coverability(source_file, capsys):
    main(['-n', source_file, '--coverability', '--timeout', '30'])
    out = capsys.readouterr().out

    assert "M001   ω    T0->M001\n" in out
    assert "Boundedness: Unbounded\n" in out


def test_timeout(source_file, capsys):
    with pytest.raises(SystemExit) as e:
        main(['-n', source_file, '--timeout', '0.5'])

    assert e.value.code == 1
    assert capsys.readouterr().out == "TIMEOUT\n"
