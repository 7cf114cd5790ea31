#!/usr/bin/env python3
from logging.config import dictConfig
from typing import Union
import argparse
import json
import logging
import os

from school_console import ConsoleClient, RosterCache, exceptions


def setup_logging(config_file: str = None, log_dir: str = None,
                  log_level: Union[str, int] = None) -> dict:
    if config_file is None:
        config_file = os.path.join(os.getcwd(), 'logging_config.json')

    if log_level is None:
        log_level = os.environ.get('LOGLEVEL', logging.INFO)

    with open(config_file, 'r') as f:
        config = json.load(f)

    for obj_type in 'loggers', 'handlers':
        obj: dict
        for obj in config[obj_type].values():
            if obj['level'] in ('NOTSET', logging.NOTSET):
                # Use environment variable if level is not set
                obj['level'] = log_level
            if (obj_type == 'handlers'
                    and log_dir is not None
                    and 'filename' in obj.keys()):
                obj['filename'] = os.path.join(log_dir, obj['filename'])

    return config


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Query the school console from the command line. '
                    'Credentials are read from CONSOLE_USERNAME and '
                    'CONSOLE_PASSWORD.'
    )
    parser.add_argument('-c', '--cache-dir', default=None,
                        help='where roster caches are kept')
    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser('schools', help='list available schools')
    groups = subparsers.add_parser('groups', help='list the groups of a school')
    groups.add_argument('school_id')
    refresh = subparsers.add_parser('refresh-roster',
                                    help='download and cache a roster')
    refresh.add_argument('school_id')
    return parser.parse_args(argv)


def main(argv=None):
    logging_config = setup_logging(config_file=os.environ.get('LOG_CONFIG'),
                                   log_dir=os.environ.get('LOGDIR'))
    dictConfig(logging_config)
    logger = logging.getLogger(__name__)
    args = parse_args(argv)

    try:
        client = ConsoleClient.connect(cache=RosterCache(args.cache_dir))
        if args.command == 'schools':
            for school in client.schools():
                print(school)
        elif args.command == 'groups':
            for group in client.groups(args.school_id):
                print(f'{group.scope:<8} {group.group_name}')
        elif args.command == 'refresh-roster':
            accounts = client.roster(args.school_id, force_refresh=True)
            print(f'Cached {len(accounts)} accounts.')
    except exceptions.ConsoleError:
        logger.exception('Could not complete command.')
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
