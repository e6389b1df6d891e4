# the scheduled scan, only collected where airflow is installed

import importlib.util
from pathlib import Path
import pytest

pytest.importorskip("airflow")
from airflow.exceptions import AirflowFailException

DAG_FILE = Path(__file__).parent.parent / "dags" / "weather_scan_dag.py"
DATA = Path(__file__).parent / "data"


@pytest.fixture
def scan_directory():
    spec = importlib.util.spec_from_file_location("weather_scan_dag", DAG_FILE)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.dag.get_task("scan_directory").python_callable


def test_bad_config_fails_the_task(monkeypatch, scan_directory):
    monkeypatch.setenv("WEATHER_HUMIDITY_THRESHOLD", "high")
    with pytest.raises(AirflowFailException, match="config error"):
        scan_directory()


def test_scan_directory_summary(monkeypatch, scan_directory):
    monkeypatch.setenv("WEATHER_DATA_DIR", str(DATA))
    for name in ("WEATHER_FILE_PATTERN", "WEATHER_HUMIDITY_THRESHOLD", "WEATHER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    summary = scan_directory()
    assert summary["n_files"] == 2
    assert summary["coldest_file"] == "weather-2014-01-08.csv"
    assert summary["coldest_temp"] == -5.0
    assert summary["lowest_humidity"] == 40.0
