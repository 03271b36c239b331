"""
Tiberium Alliances Lineup Optimizer - CLI Entry Point
=======================================================
Usage:
    ta-lineup analyze <file> [--objective max_win_chance] [--cp-limit 500]
                             [--export-json out.json] [--save-preset out.yaml]
    ta-lineup demo [--objective min_repair_time]
    ta-lineup compare <file> [--objective max_loot_per_minute]
    ta-lineup units [--faction nod] [--type vehicle]
    ta-lineup preset show <file>
    ta-lineup web [--port 8080]
"""

import argparse
import logging
import sys

from ta_lineup.catalog import load_catalog
from ta_lineup.compare import compare_and_print
from ta_lineup.engine import RecommendationEngine
from ta_lineup.format import print_full_report, print_lineup, print_units
from ta_lineup.io import (
    export_analysis_json, load_extracted, load_preset, preset_from_recommendation,
    save_preset,
)
from ta_lineup.models import EngineOptions, Objective
from ta_lineup.parity import DEMO_PATH
from ta_lineup.strategy import load_doctrines

OBJECTIVES = [o.value for o in Objective]


def _build_engine(args) -> RecommendationEngine:
    catalog = load_catalog(args.catalog) if args.catalog else None
    doctrines = load_doctrines(args.doctrines) if args.doctrines else None
    return RecommendationEngine(catalog=catalog, doctrines=doctrines)


def _options(args) -> EngineOptions:
    return EngineOptions(
        cp_limit=args.cp_limit,
        player_level=getattr(args, "player_level", None),
    )


def _run_analysis(args, filepath: str):
    engine = _build_engine(args)
    extracted = load_extracted(filepath)
    analysis = engine.analyze(extracted, args.objective, _options(args))
    return engine, extracted, analysis


def cmd_analyze(args):
    engine, extracted, analysis = _run_analysis(args, args.file)
    recs = analysis.recommendations
    print_full_report(recs, engine.catalog, extracted.target)

    if args.compare:
        compare_and_print(recs)

    if args.export_json:
        export_analysis_json(analysis, args.export_json)
        print(f"\nExported analysis {analysis.analysis_id} to {args.export_json}")

    if args.save_preset:
        name = args.preset_name or f"{extracted.target.target_type.value} lineup"
        preset = preset_from_recommendation(recs.top, name=name)
        save_preset(preset, args.save_preset)
        print(f"\nSaved preset to {args.save_preset}")


def cmd_demo(args):
    engine, extracted, analysis = _run_analysis(args, str(DEMO_PATH))
    print_full_report(analysis.recommendations, engine.catalog, extracted.target)


def cmd_compare(args):
    _, _, analysis = _run_analysis(args, args.file)
    compare_and_print(analysis.recommendations)


def cmd_units(args):
    catalog = _build_engine(args).catalog
    print_units(catalog.filter(faction=args.faction, unit_type=args.type))


def cmd_preset(args):
    preset = load_preset(args.file)
    engine = _build_engine(args)
    print(f"Preset: {preset.name}")
    if preset.description:
        print(f"  {preset.description}")
    if preset.tags:
        print(f"  Tags: {', '.join(preset.tags)}")
    print()
    print_lineup(preset.lineup, engine.catalog)
    for wave in preset.wave_plan:
        keys = ", ".join(f"{u.count}x {u.unit_key}" for u in wave.units)
        print(f" Wave {wave.wave}: {keys}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="ta-lineup",
        description="Tiberium Alliances Lineup Optimizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--catalog", default=None,
                        help="Unit catalog YAML (default: bundled unit_stats.yaml)")
    parser.add_argument("--doctrines", default=None,
                        help="Doctrine table YAML (default: bundled doctrines.yaml)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log engine decisions")
    sub = parser.add_subparsers(dest="command", help="Command to run")

    def add_engine_args(p):
        p.add_argument("--objective", "-o", choices=OBJECTIVES,
                       default=Objective.MAX_WIN_CHANCE.value,
                       help="Optimization objective (default: max_win_chance)")
        p.add_argument("--cp-limit", "-c", type=float, default=None,
                       help="Command point budget (default: 500)")
        p.add_argument("--player-level", type=int, default=None,
                       help="Player level (recorded with the analysis)")

    # analyze
    p_an = sub.add_parser("analyze", help="Recommend lineups for an extracted target file")
    p_an.add_argument("file", help="Extracted data file (.yaml or .json)")
    add_engine_args(p_an)
    p_an.add_argument("--export-json", default=None,
                      help="Write the full analysis as JSON")
    p_an.add_argument("--save-preset", default=None,
                      help="Save the top lineup as a preset YAML")
    p_an.add_argument("--preset-name", default=None,
                      help="Name for the saved preset")
    p_an.add_argument("--compare", action="store_true",
                      help="Also print a side-by-side comparison")

    # demo
    p_demo = sub.add_parser("demo", help="Analyze the bundled demo outpost")
    add_engine_args(p_demo)

    # compare
    p_cmp = sub.add_parser("compare", aliases=["cmp"],
                           help="Compare the top lineup with its alternatives")
    p_cmp.add_argument("file", help="Extracted data file (.yaml or .json)")
    add_engine_args(p_cmp)

    # units
    p_units = sub.add_parser("units", help="List the unit catalog")
    p_units.add_argument("--faction", choices=["nod", "gdi", "forgotten"], default=None)
    p_units.add_argument("--type", choices=["infantry", "vehicle", "air"], default=None)

    # preset
    p_pre = sub.add_parser("preset", help="Preset lineup files")
    p_pre.add_argument("preset_action", choices=["show"])
    p_pre.add_argument("file", help="Preset YAML file")

    # web
    p_web = sub.add_parser("web", aliases=["serve"], help="Start the JSON API server")
    p_web.add_argument("--port", type=int, default=8080,
                       help="Port to serve on (default: 8080)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    try:
        if args.command == "analyze":
            cmd_analyze(args)
        elif args.command == "demo":
            cmd_demo(args)
        elif args.command in ("compare", "cmp"):
            cmd_compare(args)
        elif args.command == "units":
            cmd_units(args)
        elif args.command == "preset":
            cmd_preset(args)
        elif args.command in ("web", "serve"):
            from ta_lineup.web import set_engine, start_server
            set_engine(_build_engine(args))
            start_server(port=args.port)
        else:
            parser.print_help()
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
