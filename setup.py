# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- DATA & CHARTS ---
    "pydantic>=2.0.0",
    "plotly>=5.18.0",
    "pandas>=2.0.0",

    # --- CONFIG ---
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- API ---
    "httpx>=0.27.0",

    # --- DASHBOARD / STREAMLIT ---
    "streamlit>=1.35.0",        # Core UI framework for the admin dashboard
    "watchdog",                 # Auto-reload during development
]

setup(
    name="getgrip-admin",
    version="1.0.0",
    description="GetGrip Admin | catalog and analytics dashboard",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"getgrip.shared.config": ["settings/*.yaml"]},
    install_requires=install_requires,
    extras_require={
        # --- TESTS ---
        "test": [
            "pytest-asyncio==1.3.0",
            "pytest",
        ],
    },
    python_requires=">=3.11",
)
