from __future__ import annotations

import random

import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from battle_city.core.arena import Arena, generate_walls
from battle_city.core.session import DEFEAT, PLAYING, VICTORY, GameSession, TickInput
from battle_city.core.settings import SessionSettings
from battle_city.core.spawn import place_enemies
from battle_city.core.tank import CARDINAL_DIRECTIONS, Bullet

_ACTIONS = st.lists(
    st.tuples(
        st.lists(st.sampled_from(CARDINAL_DIRECTIONS), max_size=2),
        st.booleans(),
    ),
    min_size=1,
    max_size=150,
)


@pytest.mark.property
@settings(max_examples=25, deadline=None)
@given(
    seed=st.integers(min_value=0, max_value=5_000),
    enemy_count=st.integers(min_value=1, max_value=10),
    move_cooldown=st.integers(min_value=1, max_value=20),
    shoot_cooldown=st.integers(min_value=1, max_value=30),
    actions=_ACTIONS,
)
def test_round_invariants_hold_every_tick(
    seed: int,
    enemy_count: int,
    move_cooldown: int,
    shoot_cooldown: int,
    actions,
) -> None:
    """Random play never breaks bounds, wall monotonicity or the end-of-round rules."""

    session_settings = SessionSettings(
        enemy_count=enemy_count,
        move_cooldown=move_cooldown,
        shoot_cooldown=shoot_cooldown,
        extra_shot_chance=0.05,
        seed=seed,
    )
    session = GameSession(session_settings, rng=random.Random(seed), clock=lambda: 0.0)
    session.start()
    arena = session.arena
    destroyed: set[int] = set()

    for moves, fire in actions:
        enemies_before = len(session.enemies)
        report = session.tick(TickInput(moves=list(moves), fire=fire))
        collisions = report.collisions
        assert collisions is not None

        for tank in [session.player, *session.enemies]:
            assert arena.in_playable_bounds(tank.x, tank.y)
            for bullet in tank.bullets:
                if bullet.active:
                    assert arena.in_outer_bounds(bullet.x, bullet.y)

        now_destroyed = {id(wall) for wall in session.walls if not wall.active}
        assert destroyed <= now_destroyed
        destroyed = now_destroyed

        assert len(session.enemies) <= enemies_before
        assert collisions.enemies_after == len(session.enemies)
        assert (report.phase == VICTORY) == (collisions.enemies_after == 0)
        assert (report.phase == DEFEAT) == collisions.player_hit
        if report.phase != PLAYING:
            break


@pytest.mark.property
@settings(max_examples=25, deadline=None)
@given(
    seed=st.integers(min_value=0, max_value=10_000),
    count=st.integers(min_value=0, max_value=40),
    column=st.integers(min_value=1, max_value=18),
    row=st.integers(min_value=1, max_value=13),
)
def test_spawn_positions_are_valid(seed: int, count: int, column: int, row: int) -> None:
    arena = Arena()
    walls = generate_walls(arena)
    player_rect = arena.tile_rect(column, row)

    positions = place_enemies(count, arena, walls, player_rect, rng=random.Random(seed))

    assert len(positions) == count
    boxes = [arena.footprint(x, y) for x, y in positions]
    for index, box in enumerate(boxes):
        assert arena.in_playable_bounds(box.left, box.top)
        assert not box.intersects(player_rect)
        assert not any(box.intersects(wall.rect) for wall in walls if wall.active)
        assert not any(box.intersects(other) for other in boxes[:index])


@pytest.mark.property
@settings(max_examples=50, deadline=None)
@given(
    direction=st.sampled_from(CARDINAL_DIRECTIONS),
    offset=st.integers(min_value=40, max_value=560),
    speed=st.integers(min_value=1, max_value=20),
)
def test_bullet_leaving_outer_bounds_dies_in_one_step(direction, offset: int, speed: int) -> None:
    arena = Arena()
    dx, dy = direction
    # Start on the edge the bullet is heading out of.
    if dx:
        x = arena.tile_size if dx < 0 else arena.width - arena.tile_size
        y = offset
    else:
        x = offset
        y = arena.tile_size if dy < 0 else arena.height - arena.tile_size
    bullet = Bullet(x, y, dx * speed, dy * speed)
    assert arena.in_outer_bounds(bullet.x, bullet.y)

    bullet.advance(arena)

    assert not bullet.active
