import logging
from collections import namedtuple

import streamlit as st
import ee

from rain_utils import auth, config, helpers, series
from rain_utils.dates import DateRange, BaselineWindow, overlaps

logger = logging.getLogger(__name__)

DIFFERENCE = "Difference (mm)"
PERCENT = "Percent of normal (%)"
CALC_MODES = [DIFFERENCE, PERCENT]

AnomalyResult = namedtuple('AnomalyResult', ['image', 'target_size', 'baseline_size'])


def load_collection(dataset):
    return ee.ImageCollection(dataset.asset_id).select(dataset.band)


def target_collection(chirps, target):
    return chirps.filterDate(target.start_str, target.end_str)


def baseline_collection(chirps, target, baseline, band='precipitation'):
    """One summed image per baseline year over the target's calendar window."""
    yearly = []
    for year, window in zip(baseline.years, baseline.windows(target)):
        total = chirps.filterDate(window.start_str, window.end_str).sum()
        yearly.append(total.set('year', year))
    # Years outside the dataset's coverage sum to an image with no bands
    return ee.ImageCollection.fromImages(yearly) \
        .filter(ee.Filter.listContains('system:band_names', band))


def compute_anomaly(chirps, target, baseline, calc_mode=DIFFERENCE, band='precipitation'):
    """
    Target-period total minus the mean of per-year totals over the baseline
    years. Returns None when either side has no images.
    """
    current = target_collection(chirps, target)
    yearly = baseline_collection(chirps, target, baseline, band)

    sizes = ee.Dictionary({'target': current.size(), 'baseline': yearly.size()}).getInfo()
    if sizes['target'] == 0 or sizes['baseline'] == 0:
        logger.warning("Baseline or target collection is empty (target=%s images, baseline=%s years)",
                       sizes['target'], sizes['baseline'])
        return None

    baseline_mean = yearly.mean()
    anomaly = current.sum().subtract(baseline_mean)
    if calc_mode == PERCENT:
        # Image.divide yields 0 for a 0 divisor; leave never-wet pixels blank
        anomaly = anomaly.divide(baseline_mean).multiply(100).updateMask(baseline_mean.gt(0))
    return AnomalyResult(anomaly.rename('anomaly'), sizes['target'], sizes['baseline'])


def normals_collection(chirps, current, baseline, band='precipitation'):
    """
    Pairs every target-day image with the baseline mean for its day of year.
    Matching is by day of year, not calendar date, so after Feb 28 a leap-year
    target day is compared with the next calendar day of non-leap history years.
    """
    history = chirps.filterDate(baseline.as_range().start_str, baseline.as_range().end_str)

    def add_normal(img):
        doy = img.date().getRelative('day', 'year').add(1)
        hist_mean = history.filter(ee.Filter.calendarRange(doy, doy, 'day_of_year')).mean()
        # A day with no history gets a zero image instead of a missing band
        hist_safe = ee.Image(ee.Algorithms.If(
            hist_mean.bandNames().size(),
            hist_mean,
            ee.Image(0).rename(band)
        )).rename('Normal_Historical')
        return img.rename('Actual_Rain').addBands(hist_safe)

    return current.map(add_normal).select(['Actual_Rain', 'Normal_Historical'])


def sample_series(series_col, lon, lat, scale):
    point = ee.Geometry.Point([lon, lat])

    def to_feature(img):
        vals = img.reduceRegion(reducer=ee.Reducer.mean(), geometry=point, scale=scale)
        return ee.Feature(None, {
            'date': img.date().format('YYYY-MM-dd'),
            'actual': vals.get('Actual_Rain'),
            'normal': vals.get('Normal_Historical'),
        })

    fc = ee.FeatureCollection(series_col.map(to_feature))
    return [f['properties'] for f in fc.getInfo()['features']]


@st.cache_data(ttl=3600, show_spinner=False)
def fetch_series(dataset_label, target_start, target_end, first_year, last_year, lon, lat):
    dataset = config.get_dataset(dataset_label)
    target = DateRange(target_start, target_end)
    baseline = BaselineWindow(first_year, last_year)
    chirps = load_collection(dataset)
    series_col = normals_collection(chirps, target_collection(chirps, target), baseline, dataset.band)
    logger.info("Sampling %s at (%.3f, %.3f) for %s", dataset.asset_id, lon, lat, target.label())
    return sample_series(series_col, lon, lat, dataset.scale)


def render(m, params, col_res):
    st.markdown("### Rainfall Anomaly Results")
    with st.spinner("Processing CHIRPS Daily Data..."):
        try:
            dataset = config.get_dataset(params['dataset'])
            target = params['target']
            baseline = params['baseline']

            chirps = load_collection(dataset)
            result = compute_anomaly(chirps, target, baseline, params['calc_mode'], dataset.band)
            if result is None:
                st.warning("Baseline or target collection is empty. Anomaly layer not added.")
                return None, {}

            unit = "%" if params['calc_mode'] == PERCENT else "mm"
            vis_params = {'min': params['zmin'], 'max': params['zmax'], 'palette': config.ANOMALY_PALETTE}
            m.addLayer(result.image, vis_params, f"Anomaly: {target.label()}")
            m.add_colorbar(vis_params, label=f"Precipitation Anomaly ({unit})")

            with col_res:
                st.markdown('<div class="glass-card">', unsafe_allow_html=True)
                st.markdown('<div class="card-label">RAINFALL ANOMALY TOOL</div>', unsafe_allow_html=True)
                st.caption(f"Source: {dataset.asset_id}")
                st.markdown(f"""
                <div class="date-badge">Period: {target.label()}</div>
                <div class="date-badge">Baseline: {baseline.label()}</div>
                """, unsafe_allow_html=True)
                st.metric("Daily Images", result.target_size)
                st.metric("Baseline Years", result.baseline_size)
                st.caption(f"Baseline data: {baseline.data_span(target).label()}")
                if overlaps(target, baseline):
                    st.caption("Target period overlaps the baseline data.")
                st.markdown("</div>", unsafe_allow_html=True)

            return result.image, vis_params

        except ValueError as e:
            st.error(f"Invalid parameters: {e}")
            return None, {}
        except ee.EEException as e:
            auth.check_permission_error(e)
            return None, {}
        except Exception as e:
            st.error(f"Error in Anomaly Tool: {e}")
            return None, {}


def render_chart(m, params, col_res):
    lon, lat = params['point']
    dataset = config.get_dataset(params['dataset'])
    target = params['target']
    baseline = params['baseline']

    m.addLayer(ee.Geometry.Point([lon, lat]), {'color': 'black'}, 'Target Location')

    with col_res:
        st.markdown('<div class="glass-card">', unsafe_allow_html=True)
        st.markdown('<div class="card-label">DAILY SERIES</div>', unsafe_allow_html=True)
        try:
            with st.spinner("Loading chart..."):
                rows = fetch_series(params['dataset'], target.start, target.end,
                                    baseline.first_year, baseline.last_year, lon, lat)
            points = series.series_points(rows)
            if points:
                actual_name, normal_name = series.series_names(target, baseline)
                df_chart = series.series_frame(points, actual_name, normal_name)
                title = series.chart_title(target, lon, lat)

                for line in title.split("\n"):
                    st.markdown(f"**{line}**")
                st.line_chart(df_chart, color=["#0000ff", "#ff0000"], y_label="mm/day")
                st.caption(f"Source: {dataset.asset_id}")

                csv = df_chart.to_csv().encode('utf-8')
                st.download_button("Download CSV", csv, "chirps_daily_series.csv", "text/csv")
                png = helpers.generate_series_plot(df_chart, title, dataset.asset_id)
                st.download_button("Download Chart (PNG)", png, "chirps_daily_series.png", "image/png")
            else:
                st.warning("No daily images in the target period.")
        except Exception as e:
            st.warning(f"Chart Error: {e}")
        st.markdown('</div>', unsafe_allow_html=True)
