import logging

import streamlit as st
import ee
import geemap.foliumap as geemap

from rain_utils import auth, config
from rain_utils.dates import compare_window, pentad_range, is_pentad_start

logger = logging.getLogger(__name__)

SINGLE_DAY = "Single day"
N_DAYS = "N days from start"
FULL_PENTAD = "Full pentad"
WINDOW_MODES = [SINGLE_DAY, N_DAYS, FULL_PENTAD]

LAYER_NAMES = {
    config.SPLIT_LEFT: 'CHIRPS3: Daily RNL (ERA5)',
    config.SPLIT_RIGHT: 'CHIRPS3: Daily SAT (IMERG)',
}


def resolve_window(params):
    if params['window_mode'] == FULL_PENTAD:
        return pentad_range(params['start'])
    if params['window_mode'] == N_DAYS:
        return compare_window(params['start'], params['num_days'])
    return compare_window(params['start'], 1)


def window_collection(dataset, window):
    return ee.ImageCollection(dataset.asset_id).filter(ee.Filter.date(window.start_str, window.end_str))


def window_sum(col, dataset):
    """Pixel-wise sum of every daily image in the window."""
    return col.select(dataset.band).sum()


def render(m, params, col_res):
    st.markdown("### CHIRPS v3 Daily: RNL vs SAT")
    with st.spinner("Summing Daily Disaggregations..."):
        try:
            window = resolve_window(params)
            left = config.get_dataset(config.SPLIT_LEFT)
            right = config.get_dataset(config.SPLIT_RIGHT)

            left_col = window_collection(left, window)
            right_col = window_collection(right, window)
            sizes = ee.Dictionary({'left': left_col.size(), 'right': right_col.size()}).getInfo()
            if sizes['left'] == 0 or sizes['right'] == 0:
                logger.warning("No images for %s (RNL=%s, SAT=%s)", window.label(), sizes['left'], sizes['right'])
                st.warning(f"No CHIRPS v3 daily images for {window.label()}.")
                return None, {}

            left_layer = geemap.ee_tile_layer(window_sum(left_col, left), config.PRECIP_VIS, LAYER_NAMES[config.SPLIT_LEFT])
            right_layer = geemap.ee_tile_layer(window_sum(right_col, right), config.PRECIP_VIS, LAYER_NAMES[config.SPLIT_RIGHT])
            m.split_map(left_layer, right_layer,
                        left_label=LAYER_NAMES[config.SPLIT_LEFT],
                        right_label=LAYER_NAMES[config.SPLIT_RIGHT])
            m.add_colorbar(config.PRECIP_VIS, label="Precipitation (mm)")

            with col_res:
                st.markdown('<div class="glass-card">', unsafe_allow_html=True)
                st.markdown('<div class="card-label">COMPARISON WINDOW</div>', unsafe_allow_html=True)
                st.markdown(f'<div class="date-badge">{window.label()} ({window.days} d)</div>', unsafe_allow_html=True)
                st.markdown(f"**Left:** {left.asset_id}")
                st.caption(left.description)
                st.markdown(f"**Right:** {right.asset_id}")
                st.caption(right.description)
                st.markdown("</div>", unsafe_allow_html=True)

                st.markdown('<div class="glass-card">', unsafe_allow_html=True)
                st.markdown('<div class="card-label">ABOUT</div>', unsafe_allow_html=True)
                st.caption("CHIRPS is a pentadal product. Daily RNL and SAT values differ, "
                           "but summed over a full pentad from its first day they give identical totals.")
                if not is_pentad_start(window.start):
                    st.caption(f"{window.start_str} is not a pentad start (days 1, 6, 11, 16, 21, 26).")
                st.markdown("</div>", unsafe_allow_html=True)

            return None, {}

        except ValueError as e:
            st.error(f"Invalid parameters: {e}")
            return None, {}
        except ee.EEException as e:
            auth.check_permission_error(e)
            return None, {}
        except Exception as e:
            st.error(f"Error in Split Compare: {e}")
            return None, {}
