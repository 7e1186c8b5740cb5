import streamlit as st
from streamlit.logger import get_logger

from services.exercise_service import ExerciseService
from utils.config import load_config, redact
from utils.formatting import set_locale

logger = get_logger(__name__)


def _list_activities(cfg) -> list[str]:
    ids = {path.stem for path in cfg.timeseries_dir.glob("*.csv")}
    ids.update(path.stem for path in cfg.gpx_dir.glob("*.gpx"))
    return sorted(ids)


def main():
    st.set_page_config(page_title="Exercise Track Viewer", layout="wide")
    cfg = load_config()
    set_locale(cfg.locale)
    st.session_state.setdefault("app_config", cfg)
    logger.debug("cfg.mapbox: %s", redact(cfg.mapbox_token))
    st.title("Exercise Track Viewer")
    st.caption("Use the sidebar to navigate between pages.")

    with st.expander("Environment (sanitized)", expanded=False):
        st.write(
            {
                "DATA_DIR": str(cfg.data_dir),
                "MAPBOX_API_KEY": redact(cfg.mapbox_token),
                "UNIT_SYSTEM": cfg.unit_system.value,
                "SPEED_MODE": cfg.speed_mode.value,
                "APP_LOCALE": cfg.locale,
            }
        )

    activities = _list_activities(cfg)
    if not activities:
        st.info(f"Aucune activité trouvée dans {cfg.timeseries_dir} ou {cfg.gpx_dir}.")
        return
    selected = st.selectbox("Activité", activities)
    exercise = ExerciseService(cfg).load(selected)
    if exercise is not None:
        st.caption(f"{len(exercise.samples)} points, {len(exercise.laps)} tours")
    st.session_state["activity_view_id"] = selected
    st.page_link("pages/Track.py", label="Voir la trace →")


if __name__ == "__main__":
    main()
