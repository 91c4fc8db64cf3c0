import asyncio
import logging
import sys

from metrics_align.core.settings import load_settings
from metrics_align.dashboard import load_dashboard
from metrics_align.translation.translation_templates import confidence_band


async def run(search_term: str):
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    dashboard = load_dashboard(settings)

    # 1. Glossary search
    matches = dashboard.catalog.filter_metrics(search_term=search_term)
    print(f"--- {len(matches)} metric(s) matching '{search_term}' ---")
    for m in matches:
        print(f"  {m.name} [{m.department.value}]: {m.definition}")
    if not matches:
        print("  No metrics found. Try adjusting your search or filter criteria.")

    # 2. Translate the first match into every other department
    translator = dashboard.new_translator_session()
    if matches:
        source = matches[0]
        for target in dashboard.translator.target_options(source.department):
            outcome = await translator.request_translation(source.name, source.department, target)
            result = outcome.result
            print(
                f"\n{result.source_metric} ({result.source_dept}) -> {result.translation} ({result.target_dept}) "
                f"[{result.confidence}% confidence, {confidence_band(result.confidence)}]"
            )
            print(f"  {result.explanation}")

    # 3. Misalignments
    stats = dashboard.misalignments.stats()
    print(
        f"\n--- Misalignments: {stats.total} total, {stats.high} high severity, "
        f"{stats.in_progress} in progress, {stats.resolved} resolved ---"
    )
    for issue in dashboard.misalignments.recent_issues():
        print(f"  [{issue.severity.value}/{issue.status.value}] {issue.title}")

    scanner = dashboard.new_scanner_session()
    await scanner.run_scan()
    print(f"  Scan finished: {len(scanner.last_findings)} new finding(s)")

    # 4. Relationship graph
    print("\n--- Strong alignments ---")
    for e in dashboard.relationships.strong_alignments():
        print(f"  {e.source} <-> {e.target}: {e.strength}%")
    print("--- Potential conflicts ---")
    for e in dashboard.relationships.potential_conflicts():
        print(f"  {e.source} <-> {e.target}: {e.strength}%")


def main():
    search_term = sys.argv[1] if len(sys.argv) > 1 else "lead"
    asyncio.run(run(search_term))


if __name__ == "__main__":
    main()
