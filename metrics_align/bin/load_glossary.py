import logging

from metrics_align.core.settings import load_settings
from metrics_align.dashboard import load_dashboard


def main():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    dashboard = load_dashboard(settings)
    print("Glossary definitions successfully loaded and validated!")

    for m in dashboard.catalog.all_metrics():
        print(f"[{m.department.value}] {m.name} ({m.alignment.value}) - owner: {m.owner}")

    print()
    print(dashboard.catalog.department_summary().to_string())


if __name__ == "__main__":
    main()
