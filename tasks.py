import logging
from invoke import task
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.absolute()


def project_relative(path):
    """Convert a relative path to an absolute path relative to the project root."""
    return str(PROJECT_ROOT / path)


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_report(tournament):
    """Print the round tabs, final round pairings and standings of a tournament."""
    from vgctour.tournament_core.knockout import group_rounds_by_stage
    from vgctour.tournament_core.pairings import round_pairings, round_title
    from vgctour.tournament_core.standings import final_standings, format_percentage

    print(tournament.name or "Unnamed tournament")
    print(" | ".join(group.label for group in group_rounds_by_stage(tournament)))

    if tournament.rounds:
        last = tournament.rounds[-1].number
        print()
        print(round_title(tournament, last))
        for row in round_pairings(tournament, last):
            print(f"{row.table_label:>4}  {row.player1_label:<32} {row.player2_label}")

    report = final_standings(tournament)
    print()
    if not report.available:
        print(f"Standings not available yet ({report.state.value})")
        return

    print(f"Standings after round {report.round_number}")
    print(f"{'#':>3}  {'Player':<28} {'Record':<8} {'Pts':>3} {'OWP%':>7} {'OOWP%':>7}")
    for row in report.rows:
        print(
            f"{row.rank:>3}  {row.player.name:<28} {row.record_string:<8} "
            f"{row.match_points:>3} {format_percentage(row.owp):>7} "
            f"{format_percentage(row.oowp):>7}"
        )


@task
def test(c, path=None):
    """Run the unit tests. Optionally specify a specific test path."""
    if path:
        c.run(f"python -m unittest {path}")
    else:
        c.run(f"python -m unittest discover -s {project_relative('vgctour')} -t {PROJECT_ROOT}")


@task
def standings(c, path, verbose=False):
    """Print pairings and standings from a tournament data file."""
    from vgctour.tournament_core.tdf import load_tournament

    configure_logging(verbose)
    print_report(load_tournament(path))


@task
def simulate(c, players=16, rounds=5, seed=None, top_cut=0, unreported=0, verbose=False):
    """Simulate a Swiss event and print its standings."""
    from vgctour.tournament_core.simulation import simulate_swiss_event

    configure_logging(verbose)
    tournament = simulate_swiss_event(
        int(players),
        int(rounds),
        seed=int(seed) if seed is not None else None,
        top_cut=int(top_cut),
        unreported=int(unreported),
    )
    print_report(tournament)
