#!/usr/bin/env python3
"""Play a hot-seat game in the terminal: four players share one keyboard."""

import argparse
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.engine import (
    CardType, GameError, GameState, Phase, Role, Team,
    add_player, create_game, end_turn, get_game_status, get_visible_cards,
    give_clue, restart_game, reveal_card, start_game,
)
from src.words import get_balanced_words


# ANSI colors for terminal output
class Colors:
    RED = "\033[91m"
    BLUE = "\033[94m"
    GRAY = "\033[90m"
    YELLOW = "\033[93m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"


TYPE_COLORS = {
    CardType.RED: Colors.RED,
    CardType.BLUE: Colors.BLUE,
    CardType.NEUTRAL: Colors.YELLOW,
    CardType.ASSASSIN: Colors.GRAY,
}

SEATS = {
    (Team.RED, Role.CLUER): "red_cluer",
    (Team.RED, Role.GUESSER): "red_guesser",
    (Team.BLUE, Role.CLUER): "blue_cluer",
    (Team.BLUE, Role.GUESSER): "blue_guesser",
}


def team_color(team: Team) -> str:
    return Colors.RED if team == Team.RED else Colors.BLUE


def print_board(state: GameState, player_id: str) -> None:
    """Print the board as ``player_id`` is allowed to see it."""
    cards = get_visible_cards(state, player_id)
    print(f"\n{Colors.BOLD}{'=' * 75}{Colors.RESET}")
    for row in range(0, 25, 5):
        cells = []
        for card in cards[row:row + 5]:
            label = f"{card.position:>2} {card.word[:11]:<11}"
            if card.type is None:
                cells.append(label)
            elif card.revealed:
                cells.append(f"{TYPE_COLORS[card.type]}{Colors.BOLD}{label}{Colors.RESET}")
            else:
                cells.append(f"{TYPE_COLORS[card.type]}{Colors.DIM}{label}{Colors.RESET}")
        print(" | ".join(cells))
    print(f"{'=' * 75}")


def print_status(state: GameState, player_id: str) -> None:
    status = get_game_status(state, player_id)
    red = status.teams[Team.RED]
    blue = status.teams[Team.BLUE]
    print(
        f"{Colors.RED}RED {red.cards_revealed}/{red.cards_total}{Colors.RESET}  "
        f"{Colors.BLUE}BLUE {blue.cards_revealed}/{blue.cards_total}{Colors.RESET}"
    )
    if status.last_clue:
        clue = status.last_clue
        print(f"Last clue: {team_color(clue.team)}{clue.word} {clue.count}{Colors.RESET}")


def setup(rng: random.Random) -> GameState:
    state = create_game(get_balanced_words(25, rng), creator_id="red_cluer", rng=rng)
    for (team, role), player_id in SEATS.items():
        state = add_player(state, player_id, player_id.replace("_", " ").title(), team, role)
    return start_game(state)


def play_turn(state: GameState) -> GameState:
    team = state.current_team
    cluer = SEATS[(team, Role.CLUER)]
    guesser = SEATS[(team, Role.GUESSER)]
    color = team_color(team)

    print(f"\n{color}{Colors.BOLD}{team.value.upper()} TEAM'S TURN{Colors.RESET}")
    input(f"{Colors.DIM}Hand the keyboard to the {team.value} cluer and press Enter...{Colors.RESET}")
    print_board(state, cluer)

    while True:
        raw = input("Clue as WORD COUNT: ").strip().rsplit(" ", 1)
        try:
            state = give_clue(state, cluer, raw[0], int(raw[1]) if len(raw) > 1 else -1)
            break
        except (GameError, ValueError) as e:
            print(f"{Colors.YELLOW}{e}{Colors.RESET}")

    print("\n" * 40)
    input(f"{Colors.DIM}Hand the keyboard to the {team.value} guesser and press Enter...{Colors.RESET}")

    while state.phase == Phase.IN_PROGRESS and state.current_team == team:
        print_board(state, guesser)
        print_status(state, guesser)
        choice = input("Position to reveal (blank to end turn): ").strip()
        if not choice:
            return end_turn(state, guesser)

        card = next((c for c in state.cards if str(c.position) == choice), None)
        if card is None:
            print(f"{Colors.YELLOW}No card at position {choice!r}{Colors.RESET}")
            continue
        try:
            state, result = reveal_card(state, card.id, guesser)
        except GameError as e:
            print(f"{Colors.YELLOW}{e}{Colors.RESET}")
            continue

        print(f"{card.word}: {TYPE_COLORS[result.card_type]}{result.card_type.value}{Colors.RESET}")
        if result.game_ended:
            break

    return state


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a hot-seat Codenames game")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    state = setup(rng)

    while True:
        while state.phase == Phase.IN_PROGRESS:
            state = play_turn(state)

        winner = state.winner
        print(f"\n{team_color(winner)}{Colors.BOLD}{winner.value.upper()} TEAM WINS!{Colors.RESET}")
        print_board(state, "red_guesser")

        if input("Play again? [y/N] ").strip().lower() != "y":
            break
        state = restart_game(state, get_balanced_words(25, rng), rng=rng)
        for (team, role), player_id in SEATS.items():
            state = add_player(state, player_id, player_id.replace("_", " ").title(), team, role)
        state = start_game(state)


if __name__ == "__main__":
    main()
