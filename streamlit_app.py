"""Entry point for ``streamlit run streamlit_app.py``."""

from app import main

main()
