"""
Command-line interface for tiny-qsim.

Usage:
    tiny-qsim run program.qasm --shots 1000
    tiny-qsim run program.qasm --json --csv state.csv
    tiny-qsim teleport programs/teleport.qasm
    tiny-qsim info
"""
import argparse
import sys

from .. import config


def cmd_run(args):
    """Run a QASM program, optionally sampling shots and exporting the state."""
    from ..core import QubitSystem
    from ..qasm import QasmInterpreter
    from ..export import save_state

    qs = QubitSystem(config.DEFAULT_QUBITS, seed=args.seed)
    interp = QasmInterpreter(qs)
    if not interp.run_file(args.file):
        return 1

    for qubit, outcome in interp.measurements:
        print(f"Qubit {qubit} = {outcome}")

    if args.shots > 1:
        result = qs.run_shots(args.shots)
        print(f"\nShots: {args.shots}")
        for bitstring, count in result.counts.items():
            pct = 100 * count / args.shots
            bar = '█' * int(pct / 2)
            print(f"  |{bitstring}⟩: {count:4d} ({pct:5.1f}%) {bar}")
    else:
        print("\nState:")
        for line in qs.format_state():
            print(f"  {line}")

    if args.json:
        if save_state(qs, args.json, "json"):
            print(f"Exported to {args.json}")
    if args.csv:
        if save_state(qs, args.csv, "csv"):
            print(f"Exported to {args.csv}")

    return 0


def cmd_teleport(args):
    """Run a teleport circuit and verify qubit 2."""
    from ..core import QubitSystem
    from ..qasm import verify_teleportation

    qs = QubitSystem(config.DEFAULT_QUBITS, seed=args.seed)
    report = verify_teleportation(args.file, qs)
    if not report.success:
        print(f"Teleportation failed: {report.reason}.")
        return 1

    print(f"Corrections: m0 = {report.m0}, m1 = {report.m1}")
    print(f"Fidelity vs expected on qubit 2 = {report.fidelity:.4f}")
    print("Teleportation verified!" if report.verified else "Teleportation NOT verified.")
    print("\nFinal state:")
    for line in qs.format_state():
        print(f"  {line}")
    return 0


def cmd_info(args):
    """Show tiny-qsim information."""
    from .. import __version__

    print(f"""
tiny-qsim v{__version__}
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

A small state vector simulator driven by restricted OpenQASM.

Supported statements:
  qreg, creg, h, x, cx, measure, // comments

Usage:
  tiny-qsim run programs/bell.qasm --shots 1000
  tiny-qsim run programs/bell.qasm --json state.json
  tiny-qsim teleport programs/teleport.qasm
""")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='tiny-qsim',
        description='A small quantum circuit simulator'
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Run command
    run_parser = subparsers.add_parser('run', help='Run a QASM program')
    run_parser.add_argument('file', help='QASM file')
    run_parser.add_argument('--shots', type=int, default=config.DEFAULT_SHOTS,
                            help='Number of measurement shots')
    run_parser.add_argument('--json', nargs='?', const=config.DEFAULT_JSON_PATH,
                            metavar='PATH', help='Export final state as JSON')
    run_parser.add_argument('--csv', nargs='?', const=config.DEFAULT_CSV_PATH,
                            metavar='PATH', help='Export final state as CSV')
    run_parser.add_argument('--seed', type=int, help='Seed for measurement sampling')
    run_parser.set_defaults(func=cmd_run)

    # Teleport command
    tele_parser = subparsers.add_parser('teleport', help='Verify a teleport circuit')
    tele_parser.add_argument('file', help='QASM file')
    tele_parser.add_argument('--seed', type=int, help='Seed for measurement sampling')
    tele_parser.set_defaults(func=cmd_teleport)

    # Info command
    info_parser = subparsers.add_parser('info', help='Show tiny-qsim info')
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
