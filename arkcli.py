#!/usr/bin/env python3

import sys
import argparse
import logging
import logging.handlers

from ark_ledger import ARK, LedgerCommTransport, LedgerTransportError

logger = logging.getLogger('logger')

DEFAULT_PATH = "44'/111'/0'/0/0"
LOG_FILE = 'arkcli.log'


def setup_logging(debug=False):
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter('%(asctime)s;%(levelname)s;%(message)s', datefmt='%Y-%m-%d %H:%M:%S')
    root = logging.getLogger()
    root.setLevel(level)
    for handler in (logging.StreamHandler(sys.stdout),
                    logging.handlers.RotatingFileHandler(filename=LOG_FILE, maxBytes=1000000, backupCount=2)):
        handler.setFormatter(formatter)
        root.addHandler(handler)


def parse_hex(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError('invalid hex string: {}'.format(value))


class ArgParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_help()
        sys.stderr.write('error: %s\n' % message)
        sys.exit(2)


def build_parser():
    parser = ArgParser()
    parser.add_argument('-p', '--path', default=DEFAULT_PATH, help='BIP32 path (default {})'.format(DEFAULT_PATH))
    parser.add_argument('-d', '--debug', action='store_true', help='Enable debug logs')
    parser.add_argument('-i', '--interface', default='hid', choices=['hid', 'tcp'], help='Device interface (default hid)')
    parser.add_argument('--server', default='127.0.0.1', help='Speculos server address (default 127.0.0.1)')
    parser.add_argument('--port', default=9999, type=int, help='Speculos server port (default 9999)')
    parser.add_argument('--getversion', action='store_true', help='Get ARK app version')
    parser.add_argument('--getpubkey', action='store_true', help='Get public key given path')

    subparsers = parser.add_subparsers(title='subcommands')
    msg_parser = subparsers.add_parser('signmsg', help='Sign a message')
    msg_parser.set_defaults(subcommand='signmsg')
    msg_parser.add_argument('--message', required=True, type=parse_hex, help='Message bytes (hex)')

    tx_parser = subparsers.add_parser('signtx', help='Sign a serialized transaction')
    tx_parser.set_defaults(subcommand='signtx')
    tx_parser.add_argument('--tx', required=True, type=parse_hex, help='Transaction bytes (hex)')
    return parser


def run(args, transport):
    ark = ARK(transport)
    if args.getversion:
        logger.info('Getting app version')
        logger.info('Version: {}'.format(ark.get_version()))
        return
    if args.getpubkey:
        logger.info('Getting public key')
        logger.info('Public key: {}'.format(ark.get_public_key(args.path)))
        return
    if 'subcommand' in vars(args):
        if args.subcommand == 'signmsg':
            logger.info('Please confirm message signature on device: {}'.format(args.message.hex()))
            logger.info('Signature: {}'.format(ark.sign_message(args.path, args.message)))
            return
        if args.subcommand == 'signtx':
            logger.info('Please confirm transaction on device')
            logger.info('Signature: {}'.format(ark.sign_transaction(args.path, args.tx)))
            return


def main(argv=None):
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) == 0:
        parser.print_help(sys.stderr)
        sys.exit(1)

    args = parser.parse_args(argv)
    setup_logging(args.debug)

    with LedgerCommTransport(interface=args.interface, server=args.server, port=args.port, debug=args.debug) as transport:
        run(args, transport)


def cli(argv=None):
    try:
        main(argv)
    except LedgerTransportError as ex:
        logger.error('Fatal error: {}'.format(ex))
    except Exception:
        logger.error('Fatal error', exc_info=True)


if __name__ == "__main__":
    cli()
