#!/usr/bin/env python3
"""
Print every collection statistic for a collection export.

Usage:
    python run_stats.py [collection.json|collection.csv] [--json output.json]

Environment:
    BOOKSTATS_LOG_LEVEL, BOOKSTATS_THEME, BOOKSTATS_LIBRARY_ID
"""

import json
import sys

from bookstats import CollectionLoader, StatsConfig, StatsDashboard, StatsLoadError, configure_logging
from bookstats.models import ThemeMode, ViewModel

DEFAULT_COLLECTION = "data/sample_collection.json"


def main():
    config = StatsConfig.from_env()
    configure_logging(config.log_level)

    args = sys.argv[1:]
    output_path = None
    if "--json" in args:
        position = args.index("--json")
        output_path = args[position + 1] if position + 1 < len(args) else "dashboard_stats.json"
        args = args[:position]
    collection_path = args[0] if args else DEFAULT_COLLECTION

    print("📚 BOOK COLLECTION STATISTICS")
    print("=" * 60)

    try:
        books = CollectionLoader().load(collection_path)
    except FileNotFoundError:
        print(f"❌ Collection file not found: {collection_path}")
        return 1
    except StatsLoadError as e:
        print(f"❌ Could not read collection: {e}")
        return 1

    dashboard = StatsDashboard(theme=config.theme, library_id=config.library_id, dark_class=config.dark_class)
    dashboard.start()
    dashboard.load_books(books)

    print_summary(dashboard.summary())
    for view_model in dashboard.view_models().values():
        print_view_model(view_model)

    # Restyle only: the numbers above stay the same
    other_theme = ThemeMode.LIGHT if config.theme == ThemeMode.DARK else ThemeMode.DARK
    dashboard.set_theme(other_theme)
    print(f"\n🎨 Switched theme to {other_theme.value}; charts restyled without recomputation")

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(dashboard.to_dashboard_dict(), f, indent=2, default=str)
        print(f"💾 Dashboard data written to {output_path}")

    dashboard.stop()
    return 0


def print_summary(summary: dict):
    """Print headline numbers"""
    print("\n📈 SUMMARY")
    print("-" * 40)
    print(f"Total books: {summary['total_books']}")
    print(f"Read books: {summary['read_books']}")
    print(f"Rated books: {summary['rated_books']}")
    if summary["average_personal_rating"] is not None:
        print(f"Average personal rating: {summary['average_personal_rating']:.1f}")
    print(f"Total pages: {summary['total_pages']:,}")
    print(f"Series: {summary['series_count']}")
    print(f"Categories: {summary['unique_categories']}")
    print(f"Libraries: {', '.join(summary['libraries']) or '-'}")


def print_view_model(view_model: ViewModel):
    title = view_model.kind.value.replace("_", " ").upper()
    print(f"\n📊 {title} ({view_model.chart_type})")
    print("-" * 40)

    if view_model.is_empty:
        print("  No data")
        return

    for index, label in enumerate(view_model.labels):
        values = ", ".join(f"{s.name}: {s.values[index]}" for s in view_model.series)
        print(f"  {label:<32} {values}")


if __name__ == "__main__":
    sys.exit(main())
