import logging
import os
from collections import namedtuple
from datetime import date

Dataset = namedtuple('Dataset', ['label', 'asset_id', 'band', 'scale', 'description'])

# CHIRPS daily products on Earth Engine
DATASETS = {
    "CHIRPS v3 Daily SAT (IMERG)": Dataset(
        "CHIRPS v3 Daily SAT (IMERG)", 'UCSB-CHC/CHIRPS/V3/DAILY_SAT', 'precipitation', 5000,
        "CHIRPS Pentad total disaggregated to daily amounts using\nNASA IMERG Late v07 satellite data"),
    "CHIRPS v3 Daily RNL (ERA5)": Dataset(
        "CHIRPS v3 Daily RNL (ERA5)", 'UCSB-CHC/CHIRPS/V3/DAILY_RNL', 'precipitation', 5000,
        "CHIRPS Pentad total disaggregated to daily amounts using\nECMWF ERA5 reanalysis data"),
    "CHIRPS v2 Daily": Dataset(
        "CHIRPS v2 Daily", 'UCSB-CHG/CHIRPS/DAILY', 'precipitation', 5000,
        "CHIRPS v2.0 daily precipitation"),
}
DEFAULT_DATASET = "CHIRPS v2 Daily"

# Split screen: left = reanalysis, right = satellite
SPLIT_LEFT = "CHIRPS v3 Daily RNL (ERA5)"
SPLIT_RIGHT = "CHIRPS v3 Daily SAT (IMERG)"
SPLIT_DEFAULT_DATE = date(2026, 1, 28)
SPLIT_CENTER = (40.0, -95.0, 4)  # lat, lon, zoom
PRECIP_VIS = {'min': 1.0, 'max': 50.0, 'palette': ['#001137', '#0aab1e', '#e7eb05', '#2c7fb8', '#253494']}

# Anomaly tool defaults
DEFAULT_TARGET_START = date(2025, 1, 1)
DEFAULT_TARGET_END = date(2025, 12, 31)
DEFAULT_BASELINE_YEARS = (2001, 2020)
ANOMALY_MIN, ANOMALY_MAX = -500, 500
ANOMALY_PALETTE = ['#e90000', '#ffffff', '#253494']
PERCENT_MIN, PERCENT_MAX = -100, 100
DEFAULT_LON, DEFAULT_LAT = 36.8, -1.0
ANOMALY_CENTER = (0.0, 37.9, 4)
SEARCH_ZOOM = 5

# Exports
EXPORT_RADIUS_M = 250000
EXPORT_SCALE = 5566
EXPORT_FOLDER = 'ChirpsView_Exports'

EE_PROJECT = os.environ.get("EE_PROJECT")
LOG_LEVEL = os.environ.get("CHIRPSVIEW_LOG_LEVEL", "INFO")


def get_dataset(label):
    """Looks up a catalog entry by its sidebar label."""
    try:
        return DATASETS[label]
    except KeyError:
        raise ValueError(f"Unknown dataset '{label}'. Choose one of: {', '.join(DATASETS)}")


def set_logging(level=None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
