import sys


def main(argv: list[str]) -> int:
    """Entry point dispatching to workflows by name."""
    if not argv:
        print("Usage: python main.py <workflow> [args...]")
        return 1

    workflow_name, rest = argv[0], argv[1:]
    if workflow_name == "enrich":
        from workflows.enrich_companies import main as enrich_main
        return enrich_main(rest)

    print(f"Unknown workflow: {workflow_name}")
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
