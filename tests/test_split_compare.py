from datetime import date
from unittest.mock import MagicMock

import pytest

import rain_tools.split_compare as split_compare
from rain_utils import config
from rain_utils.dates import DateRange


@pytest.fixture
def fake_ee(monkeypatch):
    fake = MagicMock()
    fake.EEException = type('EEException', (Exception,), {})
    monkeypatch.setattr(split_compare, "ee", fake)
    return fake


@pytest.fixture
def fake_geemap(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr(split_compare, "geemap", fake)
    return fake


def test_single_day_window() -> None:
    params = {'start': date(2026, 1, 28), 'window_mode': split_compare.SINGLE_DAY, 'num_days': 7}
    assert split_compare.resolve_window(params) == DateRange(date(2026, 1, 28), date(2026, 1, 29))


def test_n_day_window() -> None:
    params = {'start': date(2026, 1, 26), 'window_mode': split_compare.N_DAYS, 'num_days': 5}
    window = split_compare.resolve_window(params)
    assert window.days == 5
    assert window.last == date(2026, 1, 30)


def test_full_pentad_snaps_to_pentad_start() -> None:
    params = {'start': date(2026, 1, 28), 'window_mode': split_compare.FULL_PENTAD, 'num_days': 1}
    assert split_compare.resolve_window(params) == DateRange(date(2026, 1, 26), date(2026, 2, 1))


def test_split_datasets_are_rnl_and_sat() -> None:
    assert config.get_dataset(config.SPLIT_LEFT).asset_id == 'UCSB-CHC/CHIRPS/V3/DAILY_RNL'
    assert config.get_dataset(config.SPLIT_RIGHT).asset_id == 'UCSB-CHC/CHIRPS/V3/DAILY_SAT'


def test_render_sums_both_datasets_over_the_same_window(fake_ee, fake_geemap) -> None:
    fake_ee.Dictionary.return_value.getInfo.return_value = {'left': 5, 'right': 5}
    m = MagicMock()
    params = {'start': date(2026, 1, 1), 'window_mode': split_compare.N_DAYS, 'num_days': 5}

    split_compare.render(m, params, MagicMock())

    assert [c.args for c in fake_ee.ImageCollection.call_args_list] == [
        ('UCSB-CHC/CHIRPS/V3/DAILY_RNL',),
        ('UCSB-CHC/CHIRPS/V3/DAILY_SAT',),
    ]
    assert [c.args for c in fake_ee.Filter.date.call_args_list] == [
        ('2026-01-01', '2026-01-06'),
        ('2026-01-01', '2026-01-06'),
    ]
    window_col = fake_ee.ImageCollection.return_value.filter.return_value
    window_col.select.assert_called_with('precipitation')
    assert window_col.select.return_value.sum.call_count == 2

    names = [c.args[2] for c in fake_geemap.ee_tile_layer.call_args_list]
    assert names == ['CHIRPS3: Daily RNL (ERA5)', 'CHIRPS3: Daily SAT (IMERG)']
    m.split_map.assert_called_once()
    assert m.split_map.call_args.kwargs['left_label'] == 'CHIRPS3: Daily RNL (ERA5)'


def test_render_skips_split_when_a_dataset_is_empty(fake_ee, fake_geemap) -> None:
    fake_ee.Dictionary.return_value.getInfo.return_value = {'left': 1, 'right': 0}
    m = MagicMock()
    params = {'start': date(2026, 1, 28), 'window_mode': split_compare.SINGLE_DAY, 'num_days': 1}

    split_compare.render(m, params, MagicMock())

    fake_geemap.ee_tile_layer.assert_not_called()
    m.split_map.assert_not_called()


def test_render_rejects_zero_day_window(fake_ee, fake_geemap) -> None:
    m = MagicMock()
    params = {'start': date(2026, 1, 28), 'window_mode': split_compare.N_DAYS, 'num_days': 0}

    assert split_compare.render(m, params, MagicMock()) == (None, {})
    m.split_map.assert_not_called()
