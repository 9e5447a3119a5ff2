"""Streamlit admin dashboard for the GetGrip catalog."""
