# main.py
import json
import logging

from sales_dashboard.api.routers.dashboard import to_dashboard_data
from sales_dashboard.config import load_config
from sales_dashboard.logging_config.logging_config import setup_logging
from sales_dashboard.metrics.assembler import build_dashboard_metrics
from sales_dashboard.sheets.client import CsvSheetClient


# ruff: noqa: D103
def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Computing sales dashboard metrics")

    config = load_config()

    sheet_client = CsvSheetClient(
        csv_url=config["DASHBOARD_CSV_URL"],
        timeout=config["CSV_FETCH_TIMEOUT"],
    )
    try:
        grid = sheet_client.get_grid()
    finally:
        sheet_client.close()

    metrics = build_dashboard_metrics(
        grid,
        layout=config["LAYOUT"],
        business_timezone=config["BUSINESS_TIMEZONE"],
    )

    data = to_dashboard_data(metrics)
    print(json.dumps(data.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    main()
