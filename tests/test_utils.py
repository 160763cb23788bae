from unittest.mock import MagicMock

import pandas as pd
import pytest

from rain_utils import config, helpers, map_utils


def test_catalog_entries_use_precipitation_band() -> None:
    for label, dataset in config.DATASETS.items():
        assert dataset.label == label
        assert dataset.band == 'precipitation'
        assert dataset.scale == 5000
    assert config.DEFAULT_DATASET in config.DATASETS


def test_unknown_dataset_is_rejected() -> None:
    with pytest.raises(ValueError):
        config.get_dataset("PERSIANN")


def test_last_clicked() -> None:
    assert map_utils.last_clicked(None) is None
    assert map_utils.last_clicked({'last_clicked': None}) is None
    assert map_utils.last_clicked({'last_clicked': {'lat': -1.0, 'lng': 36.8}}) == (36.8, -1.0)


def test_figure_size_is_clamped() -> None:
    assert helpers.figure_size(30.0, 40.0, -5.0, 5.0) == (12, pytest.approx(12.0))
    assert helpers.figure_size(0.0, 50.0, 0.0, 0.0)[1] == 4
    assert helpers.figure_size(0.0, 0.1, 0.0, 10.0)[1] == 20


def test_export_region_is_point_buffer_bounds(monkeypatch) -> None:
    fake_ee = MagicMock()
    monkeypatch.setattr(helpers, "ee", fake_ee)

    region = helpers.export_region(36.8, -1.0, 250000)

    fake_ee.Geometry.Point.assert_called_once_with([36.8, -1.0])
    fake_ee.Geometry.Point.return_value.buffer.assert_called_once_with(250000)
    assert region is fake_ee.Geometry.Point.return_value.buffer.return_value.bounds.return_value


def test_series_plot_is_png() -> None:
    df = pd.DataFrame(
        {'Actual (2025)': [0.0, 4.2, 1.0], 'Historical Normal (2001-2020)': [1.1, 0.0, 2.0]},
        index=pd.date_range('2025-01-01', periods=3, name='Date'),
    )
    buf = helpers.generate_series_plot(df, "Daily Rainfall", 'UCSB-CHG/CHIRPS/DAILY')
    assert buf.read(8) == b'\x89PNG\r\n\x1a\n'
