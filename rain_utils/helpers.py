import logging
from io import BytesIO

import ee
import requests
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def export_region(lon, lat, radius_m):
    return ee.Geometry.Point([lon, lat]).buffer(radius_m).bounds()


def figure_size(min_lon, max_lon, min_lat, max_lat, fig_width=12):
    """Figure (width, height) in inches keeping the region's ground aspect ratio."""
    width_deg = max_lon - min_lon
    height_deg = max_lat - min_lat
    if height_deg == 0: height_deg = 0.001
    aspect_ratio = (width_deg * np.cos(np.radians((min_lat + max_lat) / 2))) / height_deg
    fig_height = fig_width / aspect_ratio if aspect_ratio > 0 else 20
    return fig_width, min(max(fig_height, 4), 20)


def generate_static_map_display(image, roi, vis_params, title, cbar_label='mm'):
    try:
        roi_json = roi.getInfo()
        roi_bounds = roi.bounds().getInfo()['coordinates'][0]

        lons = [p[0] for p in roi_bounds]
        lats = [p[1] for p in roi_bounds]
        min_lon, max_lon = min(lons), max(lons)
        min_lat, max_lat = min(lats), max(lats)
        fig_width, fig_height = figure_size(min_lon, max_lon, min_lat, max_lat)

        thumb_url = image.visualize(**vis_params).getThumbURL({
            'region': roi_json, 'dimensions': 1000, 'format': 'png', 'crs': 'EPSG:4326'
        })
        response = requests.get(thumb_url, timeout=120)
        if response.status_code != 200:
            logger.warning("Thumbnail request failed with HTTP %s", response.status_code)
            return None

        img_pil = Image.open(BytesIO(response.content))

        fig, ax = plt.subplots(figsize=(fig_width, fig_height), dpi=300, facecolor='#ffffff')
        ax.imshow(img_pil, extent=[min_lon, max_lon, min_lat, max_lat], aspect='auto')
        ax.set_title(title, fontsize=18, fontweight='bold', pad=20, color='#0b3c5d')
        ax.tick_params(colors='black', labelsize=10)
        for spine in ax.spines.values(): spine.set_edgecolor('black')

        cmap = mcolors.LinearSegmentedColormap.from_list("anomaly", vis_params['palette'])
        norm = mcolors.Normalize(vmin=vis_params['min'], vmax=vis_params['max'])
        sm = plt.cm.ScalarMappable(cmap=cmap, norm=norm)
        sm.set_array([])
        cax = fig.add_axes([0.92, 0.15, 0.02, 0.7])
        cbar = plt.colorbar(sm, cax=cax)
        cbar.set_label(cbar_label, color='black', fontsize=12)

        buf = BytesIO()
        plt.savefig(buf, format='jpg', bbox_inches='tight', facecolor='#ffffff')
        buf.seek(0)
        plt.close(fig)
        return buf
    except Exception as e:
        logger.exception("Static map rendering failed: %s", e)
        return None


def generate_series_plot(df, title, source):
    """PNG of the actual vs normal daily series (first two columns of df)."""
    actual_col, normal_col = df.columns[:2]
    fig, ax = plt.subplots(figsize=(12, 5), dpi=150, facecolor='#ffffff')
    ax.plot(df.index, df[actual_col], color='blue', linewidth=1, marker='o', markersize=2, label=actual_col)
    ax.plot(df.index, df[normal_col], color='red', linewidth=1.5, linestyle=(0, (4, 4)), label=normal_col)
    ax.set_title(title, fontsize=13, fontweight='bold', color='#0b3c5d')
    ax.set_ylabel('mm/day')
    ax.set_xlabel(f'Source: {source}', fontsize=10, fontstyle='italic')
    ax.legend(loc='upper center', bbox_to_anchor=(0.5, -0.15), frameon=False, ncol=2)
    fig.autofmt_xdate()

    buf = BytesIO()
    plt.savefig(buf, format='png', bbox_inches='tight', facecolor='#ffffff')
    buf.seek(0)
    plt.close(fig)
    return buf
