from pathlib import Path

from setuptools import find_packages, setup


with Path("requirements.txt").open() as requirements_file:
    install_requires = [line.strip() for line in requirements_file if line.strip() and not line.startswith("#")]

setup(
    name="sales_dashboard",
    version="0.1.0",
    packages=find_packages(include=["sales_dashboard", "sales_dashboard.*"]),
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": ["pytest>=7.4", "httpx>=0.25"]},
    entry_points={"console_scripts": ["sales-dashboard-api=sales_dashboard.api.main:serve"]},
    python_requires=">=3.11",
)
