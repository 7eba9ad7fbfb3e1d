"""
NY Tax Tipping Point Calculator - Main Streamlit App

Estimates the mechanical revenue gain, out-migration loss and net revenue
impact of New York personal income tax changes across income cohorts.
"""

import logging

import streamlit as st

from tipping_point.ui import run_main_app

# Configure page
st.set_page_config(
    page_title="NY Tax Tipping Point",
    page_icon="🗽",
    layout="wide",
    initial_sidebar_state="expanded"
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

run_main_app(st)
