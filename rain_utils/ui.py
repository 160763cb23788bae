def get_css():
    return """
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Rajdhani:wght@500;600;700&family=Inter:wght@400;600&display=swap');

    :root {
        --bg-color: #ffffff;
        --accent-primary: #0b3c5d;
        --accent-secondary: #2c7fb8;
        --accent-dry: #e90000;
        --text-primary: #0b3c5d;
    }

    .stApp {
        background-color: var(--bg-color);
        font-family: 'Inter', sans-serif;
        color: var(--text-primary);
    }

    h1, h2, h3 {
        font-family: 'Rajdhani', sans-serif !important;
        color: var(--accent-primary) !important;
    }

    section[data-testid="stSidebar"] {
        background-color: #f4f8fb;
        border-right: 1px solid #cfdde8;
    }

    div.stButton > button:first-child {
        background: var(--accent-primary);
        border: none;
        color: white !important;
        font-family: 'Rajdhani', sans-serif;
        font-weight: 700;
        letter-spacing: 1px;
        border-radius: 6px;
        width: 100%;
    }
    div.stButton > button:first-child:hover {
        background: var(--accent-secondary);
    }

    /* Header strip: dry-to-wet gradient like the anomaly palette */
    .hud-header {
        display: flex;
        justify-content: space-between;
        align-items: center;
        padding: 15px 25px;
        margin-bottom: 20px;
        border-bottom: 4px solid;
        border-image: linear-gradient(90deg, #e90000, #ffffff, #253494) 1;
    }
    .hud-title {
        font-family: 'Rajdhani', sans-serif;
        font-size: 2.2rem;
        font-weight: 700;
        color: var(--accent-primary);
    }
    .hud-subtitle {
        color: #5c6b7f;
        font-size: 0.9rem;
        font-weight: 600;
    }

    .glass-card {
        background: #ffffff;
        border: 1px solid #e0e7ee;
        padding: 16px;
        border-radius: 10px;
        margin-bottom: 15px;
    }
    .card-label {
        font-family: 'Rajdhani', sans-serif;
        color: var(--accent-primary);
        font-size: 1.1rem;
        font-weight: 700;
        text-transform: uppercase;
        border-bottom: 2px solid #eef3f7;
        padding-bottom: 8px;
        margin-bottom: 12px;
    }
    .date-badge {
        background-color: #e8f1f8;
        padding: 4px 8px;
        border-radius: 4px;
        font-size: 0.85rem;
        font-weight: 600;
        color: var(--accent-primary);
        margin: 5px 5px 0 0;
        display: inline-block;
    }
    </style>
    """


def header_html(tool_name):
    return f"""
<div class="hud-header">
    <div>
        <div class="hud-title">ChirpsView</div>
        <div class="hud-subtitle">TOOL: {tool_name.upper()}</div>
    </div>
    <div style="text-align:right;">
        <span class="date-badge">CHIRPS DAILY</span>
    </div>
</div>
"""
