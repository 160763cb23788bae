import geemap.foliumap as geemap

BASEMAPS = {
    "Satellite (Hybrid)": "HYBRID",
    "Roadmap": "ROADMAP",
    "Terrain": "TERRAIN",
    "OpenStreetMap": "OpenStreetMap",
}


# Folium-backed map so clicks can be read back through streamlit-folium
def get_safe_map(map_style, center):
    lat, lon, zoom = center
    m = geemap.Map(location=[lat, lon], zoom_start=zoom, max_zoom=18)
    m.add_basemap(BASEMAPS.get(map_style, "HYBRID"))
    return m


def last_clicked(map_output):
    """(lon, lat) of the latest map click, or None."""
    if not map_output or not isinstance(map_output, dict):
        return None
    click = map_output.get('last_clicked')
    if not click:
        return None
    return click['lng'], click['lat']
