"""Streamlit dashboard for the revenue simulator."""
