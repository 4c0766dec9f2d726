import logging
import streamlit as st
import matplotlib.pyplot as plt

from dopers.config import LOGGING_CONFIG, DATA_CONFIG
from dopers.data_source import fetch_results
from dopers.transformers import points_to_df
from dopers.view import ScatterView, Status
from dopers.viz import TITLE, SUBTITLE, LEGEND_LABELS, scatter_figure, scatter_figure_plotly

logging.basicConfig(
    level=getattr(logging, str(LOGGING_CONFIG["level"]).upper(), logging.INFO),
    format=LOGGING_CONFIG["format"],
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title=TITLE, layout="wide")
st.title(f"🚴 {TITLE}")
st.caption(SUBTITLE)

# One view per browser session: the fetch runs once, not on every rerun.
if "view" not in st.session_state:
    logger.info("Starting a new scatter view")
    st.session_state["view"] = ScatterView()
view: ScatterView = st.session_state["view"]

if view.status is Status.FETCHING:
    with st.spinner("Fetching data..."):
        view.load(lambda: fetch_results(DATA_CONFIG["url"]))

if view.status is Status.ERROR:
    st.error("Something bad happened and I could not get the biker data")
    st.stop()

if view.status is Status.EMPTY:
    st.info("The data source returned no race results.")
    st.stop()

if view.status is Status.FETCHING or not view.ready:
    st.info("Fetching data...")
    st.stop()

color = view.scales.color
legend = " &nbsp; ".join(
    f"<span style='color:{color(flag)}'>●</span> {LEGEND_LABELS[flag]}" for flag in (True, False)
)
st.markdown(legend, unsafe_allow_html=True)

st.plotly_chart(scatter_figure_plotly(view), use_container_width=False)

with st.expander("Static render"):
    fig, _, _ = scatter_figure(view)
    st.pyplot(fig)
    plt.close(fig)

with st.expander("Race results"):
    df = points_to_df(view.points).drop(columns=["time", "seconds", "doped"])
    st.dataframe(df, use_container_width=True, hide_index=True)
