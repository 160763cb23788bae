import streamlit as st
import ee
from datetime import datetime

# Local Modules
import rain_utils.auth as auth
import rain_utils.config as config
import rain_utils.helpers as helpers
import rain_utils.map_utils as map_utils
import rain_utils.ui as ui
from rain_utils.dates import DateRange, BaselineWindow
from rain_utils.series import parse_coordinate
import rain_tools.anomaly as anomaly
import rain_tools.split_compare as split_compare

ANOMALY_TOOL = "Rainfall Anomaly Tool"
SPLIT_TOOL = "Split Compare (RNL vs SAT)"

config.set_logging()

# --- 1. PAGE CONFIG ---
st.set_page_config(
    page_title="ChirpsView - Daily Rainfall",
    layout="wide",
    initial_sidebar_state="expanded"
)

# --- 2. CSS STYLING ---
st.markdown(ui.get_css(), unsafe_allow_html=True)

# --- 3. AUTHENTICATION (GEE) ---
auth.authenticate_gee()

# --- STATE MANAGEMENT ---
if 'point' not in st.session_state: st.session_state['point'] = None
if 'last_click' not in st.session_state: st.session_state['last_click'] = None
if 'recenter' not in st.session_state: st.session_state['recenter'] = False
if 'lon_text' not in st.session_state: st.session_state['lon_text'] = str(config.DEFAULT_LON)
if 'lat_text' not in st.session_state: st.session_state['lat_text'] = str(config.DEFAULT_LAT)

# A map click from the previous run updates the coordinate boxes before they are drawn
if st.session_state.get('pending_click'):
    lon, lat = st.session_state.pop('pending_click')
    st.session_state['lon_text'] = f"{lon:.3f}"
    st.session_state['lat_text'] = f"{lat:.3f}"
    st.session_state['point'] = (lon, lat)

# --- 4. SIDEBAR ---
with st.sidebar:
    if 'active_project' in st.session_state:
        st.caption(f"Connected to: `{st.session_state['active_project']}`")

    st.markdown("### 1. Select Tool")
    tool = st.radio("Choose Tool:", [ANOMALY_TOOL, SPLIT_TOOL], label_visibility="collapsed")

    st.markdown("**Map Style**")
    map_style = st.selectbox("Select Basemap", list(map_utils.BASEMAPS), index=0, label_visibility="collapsed")
    st.markdown("---")

    params = None

    if tool == ANOMALY_TOOL:
        st.markdown("### 2. Data & Time Parameters")
        labels = list(config.DATASETS)
        dataset = st.selectbox("Dataset Source", labels, index=labels.index(config.DEFAULT_DATASET))
        st.markdown("**Target Period**")
        col1, col2 = st.columns(2)
        t_start = col1.date_input("Start Date", config.DEFAULT_TARGET_START)
        t_end = col2.date_input("End Date", config.DEFAULT_TARGET_END)
        st.markdown("**Baseline Years**")
        col3, col4 = st.columns(2)
        b_first = col3.number_input("From", 1981, 2100, config.DEFAULT_BASELINE_YEARS[0])
        b_last = col4.number_input("To", 1981, 2100, config.DEFAULT_BASELINE_YEARS[1])
        calc_mode = st.radio("Calculation Mode", anomaly.CALC_MODES)

        st.markdown("**Color Range**")
        is_pct = calc_mode == anomaly.PERCENT
        col5, col6 = st.columns(2)
        zmin = col5.number_input("Min", value=config.PERCENT_MIN if is_pct else config.ANOMALY_MIN)
        zmax = col6.number_input("Max", value=config.PERCENT_MAX if is_pct else config.ANOMALY_MAX)

        try:
            params = {
                'dataset': dataset,
                'target': DateRange.inclusive(t_start, t_end),
                'baseline': BaselineWindow(int(b_first), int(b_last)),
                'calc_mode': calc_mode,
                'zmin': zmin, 'zmax': zmax,
            }
        except ValueError as e:
            st.error(str(e))

        st.markdown("---")
        st.markdown("### 3. Time Series Location")
        col7, col8 = st.columns(2)
        lon_text = col7.text_input("Lon", key='lon_text')
        lat_text = col8.text_input("Lat", key='lat_text')
        if st.button("Get Chart for Coordinates"):
            try:
                st.session_state['point'] = (parse_coordinate(lon_text, "longitude", 180), parse_coordinate(lat_text, "latitude", 90))
                st.session_state['recenter'] = True
            except ValueError as e:
                st.error(str(e))
        st.caption("Or click on the map.")

    elif tool == SPLIT_TOOL:
        st.markdown("### 2. Comparison Window")
        start = st.date_input("Start Date", config.SPLIT_DEFAULT_DATE)
        window_mode = st.radio("Window", split_compare.WINDOW_MODES)
        num_days = 1
        if window_mode == split_compare.N_DAYS:
            num_days = st.number_input("Number of Days", 1, 31, 5)
        st.caption("Pentads start on days 1, 6, 11, 16, 21 and 26 of each month.")
        params = {'start': start, 'window_mode': window_mode, 'num_days': int(num_days)}


# --- 5. MAIN CONTENT ---
st.markdown(ui.header_html(tool), unsafe_allow_html=True)

if params is None:
    st.info("Fix the parameters in the sidebar to run the analysis.")
    st.stop()

col_map, col_res = st.columns([3, 1])

# --- CASE 1: SPLIT COMPARE ---
if tool == SPLIT_TOOL:
    m = map_utils.get_safe_map(map_style, config.SPLIT_CENTER)
    split_compare.render(m, params, col_res)
    with col_map:
        m.to_streamlit(height=650)

# --- CASE 2: ANOMALY MAP + SERIES ---
else:
    point = st.session_state['point']
    center = config.ANOMALY_CENTER
    if point and st.session_state['recenter']:
        center = (point[1], point[0], config.SEARCH_ZOOM)
        st.session_state['recenter'] = False
    m = map_utils.get_safe_map(map_style, center)

    image_to_export, vis_export = anomaly.render(m, params, col_res)
    if point:
        anomaly.render_chart(m, dict(params, point=point), col_res)

    # --- EXPORT TOOLS ---
    with col_res:
        st.markdown('<div class="glass-card">', unsafe_allow_html=True)
        st.markdown('<div class="card-label">EXPORTS</div>', unsafe_allow_html=True)
        if image_to_export is None:
            st.caption("No anomaly layer to export.")
        elif point is None:
            st.caption("Set a location to define the export region.")
        else:
            roi = helpers.export_region(point[0], point[1], config.EXPORT_RADIUS_M)
            if st.button("Save to Drive (GeoTIFF)"):
                desc = f"ChirpsView_Anomaly_{datetime.now().strftime('%Y%m%d')}"
                ee.batch.Export.image.toDrive(
                    image=image_to_export.toFloat(), description=desc,
                    scale=config.EXPORT_SCALE, region=roi, folder=config.EXPORT_FOLDER
                ).start()
                st.toast("Export started! Check Google Drive.")

            st.markdown("---")
            report_title = st.text_input("Report Title", f"Rainfall Anomaly: {params['target'].label()}")
            if st.button("Generate Map Image"):
                with st.spinner("Rendering..."):
                    unit = "%" if params['calc_mode'] == anomaly.PERCENT else "mm"
                    buf = helpers.generate_static_map_display(image_to_export, roi, vis_export, report_title, cbar_label=f"Anomaly ({unit})")
                    if buf:
                        st.download_button("Download JPG", buf, "ChirpsView_Anomaly.jpg", "image/jpeg", use_container_width=True)
                    else:
                        st.warning("Map image could not be rendered.")
        st.markdown("</div>", unsafe_allow_html=True)

    with col_map:
        map_output = m.to_streamlit(height=650, bidirectional=True)

    clicked = map_utils.last_clicked(map_output)
    if clicked and clicked != st.session_state['last_click']:
        st.session_state['last_click'] = clicked
        st.session_state['pending_click'] = clicked
        st.rerun()
