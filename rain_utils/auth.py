import json
import logging

import streamlit as st
import ee

from rain_utils import config

logger = logging.getLogger(__name__)


def authenticate_gee():
    try:
        # 1. Service Account (Secrets)
        if "gcp_service_account" in st.secrets:
            try:
                service_account = st.secrets["gcp_service_account"]["client_email"]
                key_data = json.dumps(dict(st.secrets["gcp_service_account"]))
                credentials = ee.ServiceAccountCredentials(service_account, key_data=key_data)
                ee.Initialize(credentials)
                st.session_state['active_project'] = st.secrets["gcp_service_account"].get("project_id", "Service Account")
                logger.info("Earth Engine initialized with service account %s", service_account)
                return
            except Exception as e:
                logger.warning("Service account authentication failed, trying local credentials: %s", e)

        # 2. Local credentials (earthengine authenticate)
        target_project = config.EE_PROJECT
        try:
            ee.Initialize(project=target_project)
            st.session_state['active_project'] = target_project or 'Default (Local)'
            logger.info("Earth Engine initialized for project %s", st.session_state['active_project'])
        except Exception as e:
            if "project" not in str(e).lower() and "permission" not in str(e).lower():
                raise
            logger.warning("Could not connect to project %s: %s", target_project, e)
            st.warning(f"Could not auto-connect to `{target_project or 'default project'}`.")
            project_id = st.text_input(
                "Enter your Google Cloud Project ID:",
                value=target_project or "",
                help="The ID of the GCP project with Earth Engine API enabled. Set EE_PROJECT to skip this step."
            )
            if not project_id:
                st.stop()
            try:
                ee.Initialize(project=project_id)
                st.session_state['active_project'] = project_id
                st.success(f"Successfully authenticated with project: {project_id}")
            except Exception as e2:
                st.error(f"Failed to connect with project ID '{project_id}': {e2}")
                st.stop()
    except Exception as e:
        logger.error("Earth Engine authentication error: %s", e)
        st.error(f"GEE Authentication Error: {e}")
        st.info("If running locally, run `earthengine authenticate` in your terminal. If on Cloud, add secrets.")
        st.stop()


def check_permission_error(e):
    """Stops the app with a fix-it link when Earth Engine reports a missing Service Usage permission."""
    if "serviceUsage" in str(e) or "permission" in str(e):
        project = st.session_state.get('active_project', 'your-project-id')
        st.error("**Permission Error: Service Usage API not enabled.**")
        st.markdown(f"[Enable Service Usage API](https://console.cloud.google.com/apis/library/serviceusage.googleapis.com?project={project})")
        st.stop()
    st.warning(f"Map Error: {e}")
