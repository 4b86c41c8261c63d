from doodlink.interfaces.cli.cli import start

raise SystemExit(start())
