import logging
from pathlib import Path

import pytest

from pcb_scheduler.cli import configure_logging, main


def test_fcfs_report(capsys):
    assert main(["fcfs", "5", "3", "8"]) == 0
    out, err = capsys.readouterr()
    assert out.splitlines() == [
        "Using FCFS",
        "",
        "Accepted P0: Burst 5",
        "Accepted P1: Burst 3",
        "Accepted P2: Burst 8",
        "Average wait time: 4.33",
    ]
    assert err == ""


def test_rr_report(capsys):
    assert main(["rr", "4", "5", "3", "8"]) == 0
    out, err = capsys.readouterr()
    lines = out.splitlines()
    assert lines[0] == "Using RR(4)."
    assert lines[-1] == "Average wait time: 6.33"
    assert err == ""


def test_rr_zero_quantum_is_accepted(capsys):
    assert main(["rr", "0", "5", "3"]) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines()[-1] == "Average wait time: 0.00"


def test_missing_arguments(capsys):
    for argv in ([], ["fcfs"], ["rr"], ["rr", "4"]):
        assert main(argv) == 1
        out, err = capsys.readouterr()
        assert out == ""
        assert err.startswith("ERROR:")
        assert len(err.strip().splitlines()) == 1


def test_unknown_mode(capsys):
    assert main(["sjf", "1", "2"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("ERROR:")


def test_non_integer_burst(capsys):
    assert main(["fcfs", "5", "abc"]) == 1
    assert capsys.readouterr().err.startswith("ERROR:")


def test_negative_burst(capsys):
    assert main(["fcfs", "5", "-3"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "Failed to initialize processes" in err


def test_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text("[3, 8]")
    assert main(["fcfs", "5", "--workload", str(p)]) == 0
    out, _ = capsys.readouterr()
    assert "Accepted P2: Burst 8" in out
    assert out.splitlines()[-1] == "Average wait time: 4.33"


def test_missing_workload_file(tmp_path: Path, capsys):
    assert main(["fcfs", "--workload", str(tmp_path / "nope.json")]) == 1
    assert capsys.readouterr().err.startswith("ERROR:")


def test_trace_prints_intermediate_state(capsys):
    assert main(["rr", "4", "5", "3", "8", "--trace"]) == 0
    out, _ = capsys.readouterr()
    assert "t=0..4: P0 ran 4" in out
    assert "P0: burst_left=1 wait=0" in out
    assert "P2: burst_left=0 wait=8" in out


def test_details_and_gantt(capsys):
    assert main(["fcfs", "5", "3", "8", "--details", "--gantt"]) == 0
    out, _ = capsys.readouterr()
    assert "Per-process metrics" in out
    assert "Elapsed time: 16" in out
    assert "Average turnaround time: 9.67" in out
    assert "Gantt Chart" in out


def test_compare(capsys):
    assert main(["compare", "4", "5", "3", "8"]) == 0
    out, _ = capsys.readouterr()
    assert "FCFS" in out
    assert "Round Robin" in out
    assert "4.33" in out
    assert "6.33" in out


def test_verbose_logs_scheduler_decisions(capsys):
    assert main(["--verbose", "fcfs", "1", "2"]) == 0
    _, err = capsys.readouterr()
    assert "FCFS ran P0 from 0 to 1" in err
    main(["fcfs", "1", "2"])
    assert capsys.readouterr().err == ""


def test_fractional_workload_burst_is_rejected(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text("[5.7, 3.2]")
    assert main(["fcfs", "--workload", str(p)]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("ERROR: Invalid burst value")


def test_malformed_csv_workload_is_one_error_line(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("burst\n" + "1" * 200000 + "\n")
    assert main(["rr", "2", "--workload", str(p)]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("ERROR: Malformed CSV workload")
    assert len(err.strip().splitlines()) == 1


def test_logging_does_not_propagate_to_root():
    configure_logging(verbose=True)
    package_logger = logging.getLogger("pcb_scheduler")
    assert package_logger.propagate is False
    assert len(package_logger.handlers) == 1

    configure_logging(verbose=False)
    assert len(package_logger.handlers) == 1


def test_compare_help_describes_every_argument(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["compare", "--help"])
    assert exc_info.value.code == 0
    help_text = " ".join(capsys.readouterr().out.split())
    assert "CPU burst length of each process, in arrival order." in help_text
    assert "JSON or CSV file with more bursts" in help_text
