# dags/weather_scan_dag.py
from __future__ import annotations
from datetime import datetime, timedelta
from airflow.decorators import dag, task
from airflow.exceptions import AirflowFailException
from weatherscan.config import ConfigError, Settings
from weatherscan.service import coldest_across_files, lowest_humidity_across_files
from weatherscan.source import WeatherDataError, select_files


@dag(
    dag_id="weather_scan",
    start_date=datetime(2025, 1, 1),
    schedule="0 6 * * *",
    catchup=False,
    default_args={"owner": "alex-eng", "retries": 1, "retry_delay": timedelta(minutes=2)},
    tags=["weather", "csv-scan"],
)
def weather_scan():
    @task(execution_timeout=timedelta(minutes=10))
    def scan_directory() -> dict:
        try:
            settings = Settings.from_env()
        except ConfigError as e:
            raise AirflowFailException(f"scan_directory config error: {e}")
        try:
            files = select_files(settings.data_dir, settings.file_pattern)
        except WeatherDataError as e:
            raise AirflowFailException(f"scan_directory: {e}")
        if not files:
            raise AirflowFailException(f"scan_directory: no {settings.file_pattern} files in {settings.data_dir}")

        # files are scanned one after another, unreadable ones are logged and skipped
        coldest = coldest_across_files(files)
        driest = lowest_humidity_across_files(files)
        return {
            "n_files": len(files),
            "coldest_file": coldest.path.name if coldest else None,
            "coldest_temp": coldest.reading.value if coldest else None,
            "coldest_at": coldest.reading.observed_at if coldest else None,
            "lowest_humidity": driest.value if driest else None,
            "lowest_humidity_at": driest.observed_at if driest else None,
        }

    @task
    def publish(summary: dict) -> None:
        if summary["coldest_file"] is None:
            print(f"No valid temperature readings in {summary['n_files']} files")
        else:
            print(
                f"Coldest: {summary['coldest_temp']:.1f} F in {summary['coldest_file']} "
                f"at {summary['coldest_at']} (n={summary['n_files']})"
            )
        if summary["lowest_humidity"] is None:
            print("No valid humidity readings")
        else:
            print(f"Lowest Humidity: {summary['lowest_humidity']:g} at {summary['lowest_humidity_at']}")

    publish(scan_directory())

dag = weather_scan()
