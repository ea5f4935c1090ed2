"""
Run one uptime monitor sweep outside of a web request.

Usage: campushub-sweep [--force]

Meant to be run by a scheduler (e.g. cron, every few minutes). Store and
monitor settings are read from the environment, as for the web app.
"""

from argparse import ArgumentParser
import json
import logging
from typing import List, Optional

from campushub.factory import create_web_app
from campushub import uptime

logger = logging.getLogger('campushub.scripts.sweep')


def main(argv: Optional[List[str]] = None) -> int:
    """Run the sweep and print the outcome as JSON."""
    parser = ArgumentParser(description='Probe all configured monitors.')
    parser.add_argument('--force', action='store_true',
                        help='ignore the minimum interval between sweeps')
    args = parser.parse_args(argv)

    logging.basicConfig(
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    app = create_web_app()
    if args.force:
        app.config['UPTIME_MIN_INTERVAL'] = 0
    with app.app_context():
        result = uptime.run_sweep()
    if result.skipped:
        logger.info('Sweep skipped: %s', result.reason)
    print(json.dumps(result.to_dict()))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
