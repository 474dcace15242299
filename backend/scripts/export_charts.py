"""
Script para exportar todas las specs Vega-Lite del catalogo a archivos JSON.

Uso:
    python scripts/export_charts.py out/ [--db ./data/insights.db] [--from 2024-01-01] [--to 2024-12-31]
"""
import argparse
import sys
from datetime import date
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from insights.charts.catalog import CHART_CATALOG, build_chart
from insights.config import get_settings
from insights.db.summary_store import SummaryStore
from insights.errors import SummaryDecodeError


def export_charts(out_dir: Path, db_path: str, date_from=None, date_to=None, default_days: int = 365) -> int:
    """Escribe <chart_id>.json por cada grafico; retorna la cantidad de errores"""
    out_dir.mkdir(parents=True, exist_ok=True)
    errors = 0
    with SummaryStore(db_path) as store:
        print(f"Store: {db_path} ({store.count()} summaries)")
        for chart_type in CHART_CATALOG:
            try:
                spec = build_chart(chart_type.value, store, date_from, date_to, default_days)
            except SummaryDecodeError as e:
                print(f"  [FAIL] {chart_type.value}: {e}")
                errors += 1
                continue
            path = out_dir / f"{chart_type.value}.json"
            path.write_text(spec, encoding="utf-8")
            print(f"  [OK] {path}")
    return errors


def main(argv=None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Export Vega-Lite chart specs")
    parser.add_argument("out_dir", type=Path)
    parser.add_argument("--db", default=settings.db_path, help="SQLite summary store")
    parser.add_argument("--from", dest="date_from", type=date.fromisoformat, default=None)
    parser.add_argument("--to", dest="date_to", type=date.fromisoformat, default=None)
    args = parser.parse_args(argv)

    errors = export_charts(args.out_dir, args.db, args.date_from, args.date_to, settings.default_range_days)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
