"""Entry point for `python -m iogrbot`."""

import sys


def _parse_cmd(text, admin=False):
    """Parse a single command line and print the result in test_cases.txt format."""
    from iogrbot.commands.router import best_parse, strip_prefix

    p = best_parse(strip_prefix(text, "!"), admin=admin)

    print(f"> {text}")

    if p is None:
        print("module: none")
        return

    mod_name = p.module.__name__.split(".")[-1]
    print(f"module: {mod_name}")
    print(f"command: {p.command}")

    for key, val in p.args.items():
        if isinstance(val, list):
            print(f"{key}: {' '.join(val) if val else 'empty'}")
        elif val is None:
            print(f"{key}: none")
        else:
            print(f"{key}: {val}")


if __name__ == "__main__" or not sys.argv[0]:
    if len(sys.argv) >= 3 and sys.argv[1] in ("-parse", "-parse-admin"):
        _parse_cmd(" ".join(sys.argv[2:]), admin=sys.argv[1] == "-parse-admin")
    else:
        from iogrbot.main import main
        main()
