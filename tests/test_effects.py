from __future__ import annotations

import random

from falling_blocks.game import LineClearEvent
from falling_blocks.visualization.effects import ParticleSystem, ScreenFeedback


def _event(rows: tuple[int, ...], token: int = 1, width: int = 10) -> LineClearEvent:
    return LineClearEvent(rows=rows, colors=tuple((token,) * width for _ in rows))


def test_line_clear_emits_particles_in_cell_colors() -> None:
    system = ParticleSystem(max_particles=1000, rng=random.Random(0))
    system.emit_line_clear(_event((19,), token=7, width=4), cell_size=30)

    assert len(system.particles) == 4 * ParticleSystem.PER_CELL
    assert {p.color for p in system.particles} == {(255, 165, 0)}
    assert {p.y for p in system.particles} == {19 * 30 + 15}
    assert sorted({p.x for p in system.particles}) == [15, 45, 75, 105]


def test_particles_are_capped_to_newest() -> None:
    system = ParticleSystem(max_particles=100, rng=random.Random(0))
    system.emit_line_clear(_event((19, 18), token=2), cell_size=30)

    assert len(system.particles) == 100
    assert all(p.y == 18 * 30 + 15 for p in system.particles[-10:])


def test_particles_fade_out() -> None:
    system = ParticleSystem(rng=random.Random(0))
    system.emit(10.0, 10.0, (255, 0, 0))
    start_y = [p.y for p in system.particles]

    system.update()
    assert all(p.alpha < 1.0 for p in system.particles)
    assert [p.y for p in system.particles] != start_y

    for _ in range(40):
        system.update()
    assert system.particles == []


def test_screen_feedback_flash_and_shake() -> None:
    feedback = ScreenFeedback(rng=random.Random(0))
    assert not feedback.flashing
    assert feedback.offset == (0, 0)

    feedback.trigger()
    assert feedback.flashing
    assert all(-5 <= o <= 5 for o in feedback.offset)

    feedback.update(100)
    assert not feedback.flashing

    feedback.update(100)
    assert feedback.offset == (0, 0)
