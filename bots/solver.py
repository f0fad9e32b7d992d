"""Reconstruct a concrete deal consistent with a belief state."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from pinochle.cards import Card
from pinochle.seats import SEAT_COUNT

from .belief import BeliefState


class InconsistentBeliefs(RuntimeError):
    """Raised when no deal satisfies the belief constraints."""


def _bits(mask: int) -> List[int]:
    return [seat for seat in range(SEAT_COUNT) if mask & (1 << seat)]


def _propagate(masks: List[int], capacities: List[int], assignment: List[int]) -> bool:
    """Fix forced cards until nothing changes; False on a contradiction."""
    changed = True
    while changed:
        changed = False
        full = 0
        for seat in range(SEAT_COUNT):
            if capacities[seat] <= 0:
                full |= 1 << seat
        for index, mask in enumerate(masks):
            if assignment[index] >= 0:
                continue
            mask &= ~full
            masks[index] = mask
            if mask == 0:
                return False
            if mask & (mask - 1) == 0:
                seat = mask.bit_length() - 1
                assignment[index] = seat
                capacities[seat] -= 1
                if capacities[seat] < 0:
                    return False
                changed = True
    return True


def _search(masks: Tuple[int, ...], capacities: Tuple[int, ...], assignment: Tuple[int, ...]) -> Optional[Tuple[int, ...]]:
    """Backtracking over the unassigned cards, most-constrained seat first."""
    open_cards = [index for index, seat in enumerate(assignment) if seat < 0]
    if not open_cards:
        return assignment

    freedoms = [0] * SEAT_COUNT
    for index in open_cards:
        for seat in _bits(masks[index]):
            freedoms[seat] += 1
    for seat in range(SEAT_COUNT):
        if freedoms[seat] < capacities[seat]:
            return None
    seat_order = sorted(range(SEAT_COUNT), key=lambda seat: freedoms[seat])

    card = open_cards[0]
    for seat in seat_order:
        if capacities[seat] <= 0 or not masks[card] & (1 << seat):
            continue
        next_capacities = list(capacities)
        next_capacities[seat] -= 1
        next_assignment = list(assignment)
        next_assignment[card] = seat
        next_masks = list(masks)
        # Masks only shrink when a hand fills up.
        if next_capacities[seat] == 0 and not _propagate(next_masks, next_capacities, next_assignment):
            continue
        solved = _search(tuple(next_masks), tuple(next_capacities), tuple(next_assignment))
        if solved is not None:
            return solved
    return None


def solve_deal(
    unseen: Sequence[Card],
    masks: Sequence[int],
    capacities: Sequence[int],
    rng: Random,
) -> List[List[Card]]:
    """Assign every unseen card to a seat.

    ``masks[i]`` is the bitmask of seats allowed to hold ``unseen[i]`` and
    ``capacities[s]`` the number of unseen cards seat ``s`` must receive.
    """
    if len(unseen) != len(masks):
        raise ValueError("Every unseen card needs a candidacy mask.")
    if sum(capacities) != len(unseen):
        raise InconsistentBeliefs(f"{len(unseen)} unseen cards cannot fill hands needing {sum(capacities)}.")

    order = list(range(len(unseen)))
    rng.shuffle(order)
    cards = [unseen[index] for index in order]
    work_masks = [masks[index] for index in order]
    work_capacities = list(capacities)
    assignment = [-1] * len(cards)

    if not _propagate(work_masks, work_capacities, assignment):
        raise InconsistentBeliefs("Forced assignments overflow a hand.")
    solved = _search(tuple(work_masks), tuple(work_capacities), tuple(assignment))
    if solved is None:
        raise InconsistentBeliefs("No deal satisfies the belief constraints.")

    hands: List[List[Card]] = [[] for _ in range(SEAT_COUNT)]
    for card, seat in zip(cards, solved):
        hands[seat].append(card)
    return hands


def sample_deal(belief: BeliefState, rng: Random) -> List[List[Card]]:
    """One full deal: known cards stay where they are, unseen cards are solved."""
    unseen = belief.unseen_cards()
    masks = [belief.candidacy(card) for card in unseen]
    solved = solve_deal(unseen, masks, belief.capacities(), rng)
    return [list(belief.seats[seat].known_cards) + solved[seat] for seat in range(SEAT_COUNT)]
