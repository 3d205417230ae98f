import logging
import os
from dataclasses import dataclass
from typing import Optional

ENV_DATA = 'CITYSCHEDULE_DATA'
ENV_LOG_LEVEL = 'CITYSCHEDULE_LOG_LEVEL'


@dataclass
class AnalysisConfig:
    """Settings for one CLI or dashboard run."""
    data_path: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    output_dir: Optional[str] = None
    log_level: str = 'WARNING'

    @classmethod
    def from_env(cls) -> 'AnalysisConfig':
        return cls(data_path=os.environ.get(ENV_DATA) or None,
                   log_level=os.environ.get(ENV_LOG_LEVEL, 'WARNING').upper())

    @classmethod
    def from_args(cls, args) -> 'AnalysisConfig':
        base = cls.from_env()
        return cls(data_path=args.data or base.data_path,
                   source=args.source, target=args.target,
                   output_dir=args.output_dir,
                   log_level=(args.log_level or base.log_level).upper())


def setup_logging(level: str = 'WARNING'):
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
