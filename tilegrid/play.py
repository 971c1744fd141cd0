# -*- coding: utf-8 -*-
"""
Play 2048 in a terminal.
"""
import argparse
import logging
from pathlib import Path

from tilegrid.controls import Command, resolve_key
from tilegrid.core import Direction, GameState, can_move, legal_moves
from tilegrid.session import GameSession
from tilegrid.storage import SnapshotStore

HELP = 'Moves: w/a/s/d or up/left/down/right. u: undo, n: new game, q: quit.'


def render(state: GameState, can_undo: bool) -> str:
    """
    Format the game for the console.

    Parameters
    ----------
    state: GameState
        State to draw

    can_undo: bool
        Whether the undo hint is shown

    Returns
    -------
    str
        The board, score, status and legal moves lines
    """
    lines = [' \t'.join(str(value) if value else '.' for value in row) for row in state.grid.tolist()]
    status = f'score={state.score}'
    if can_undo:
        status += '  (u to undo)'
    if state.game_over:
        status += '  GAME OVER'
    lines.append(status)
    if not state.game_over:
        lines.append('moves=' + ', '.join(direction.value for direction in legal_moves(state.grid)))
    return '\n'.join(lines)


def handle_command(session: GameSession, store: SnapshotStore | None, key: str) -> bool:
    """
    Apply one line of user input to the session.

    Parameters
    ----------
    session: GameSession
        The game being played

    store: SnapshotStore | None
        Where the session is saved after every change

    key: str
        Key name typed by the user

    Returns
    -------
    bool
        False when the user asked to quit
    """
    command = resolve_key(key)
    if command is None:
        print(HELP)
        return True

    if command is Command.QUIT:
        return False

    if command is Command.UNDO:
        if not session.undo():
            print('nothing to undo')
    elif command is Command.NEW_GAME:
        session.reset()
    elif isinstance(command, Direction):
        if not session.state.game_over and not can_move(session.state.grid, command):
            print(f'cannot move {command.value}')
            return True
        transition = session.step(command)
        if transition.moved:
            print(f'reward={transition.score_gained}')
        for event in transition.events:
            print(event)

    if store is not None:
        store.save(session.to_snapshot())
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Play 2048 in the terminal.')
    parser.add_argument('--state-file', type=Path, default=None, help='JSON file the game is saved to and resumed from')
    parser.add_argument('--seed', type=int, default=None, help='Seed for tile spawns')
    parser.add_argument('--log-level', default='WARNING', help='Logging level')
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    store = SnapshotStore(args.state_file) if args.state_file else None
    snapshot = store.load() if store is not None else None
    session = GameSession.from_snapshot(snapshot, seed=args.seed)

    print(HELP)
    while True:
        print(render(session.state, session.can_undo))
        try:
            key = input('> ')
        except EOFError:
            break
        if not handle_command(session, store, key):
            break
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
