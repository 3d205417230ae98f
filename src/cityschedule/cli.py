import argparse
import json
import logging
import sys
from pathlib import Path

from .config import AnalysisConfig, setup_logging
from .data_loader import create_sample_file, load_graph
from .errors import ScheduleError
from .generator import generate_all_datasets
from .kpis import compute_kpis
from .pipeline import run_analysis
from .report import components_frame, format_report, schedule_frame

logger = logging.getLogger(__name__)


def build_parser():
    ap = argparse.ArgumentParser(prog='cityschedule', description='SCC, topological order and critical path analysis for task graphs')
    ap.add_argument('--data', help='task file (.json, .csv, .xlsx); a sample tasks.json is created when omitted')
    ap.add_argument('--source', help='task id whose component is the shortest-path source')
    ap.add_argument('--target', help='task id whose component is the shortest-path target')
    ap.add_argument('--json', action='store_true', help='print the KPI summary as JSON')
    ap.add_argument('--output-dir', help='write components.csv and schedule.csv here')
    ap.add_argument('--generate', metavar='DIR', help='write the nine synthetic datasets to DIR and exit')
    ap.add_argument('--seed', type=int, default=42)
    ap.add_argument('--log-level', help='logging level (default WARNING)')
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    cfg = AnalysisConfig.from_args(args)
    setup_logging(cfg.log_level)
    try:
        if args.generate:
            for row in generate_all_datasets(args.generate, seed=args.seed):
                print(f"{row['file']}: {row['vertices']} vertices, {row['edges']} edges, cyclic={row['cyclic']}")
            return 0
        data = cfg.data_path
        if not data:
            data = 'tasks.json'
            print(f'No input file provided. Creating sample file: {data}')
            create_sample_file(data)
        graph = load_graph(data)
        analysis = run_analysis(graph, source=cfg.source, target=cfg.target)
        if args.json:
            print('# Summary')
            print(json.dumps(compute_kpis(analysis), indent=2))
        else:
            print(format_report(analysis))
        if cfg.output_dir:
            out = Path(cfg.output_dir)
            out.mkdir(parents=True, exist_ok=True)
            components_frame(analysis).to_csv(out / 'components.csv', index=False)
            schedule_frame(analysis).to_csv(out / 'schedule.csv', index=False)
            logger.info("Wrote tables to %s", out)
    except ScheduleError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
