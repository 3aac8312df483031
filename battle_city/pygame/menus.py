"""Menu and HUD rendering helpers for the pygame client."""

from __future__ import annotations

import math

import pygame

from battle_city.core.session import MENU, PLAYING, RenderSnapshot


def draw_hud(app, snapshot: RenderSnapshot) -> None:
    """Draw round, enemies left and the running score on the top border row."""
    if snapshot.round == 0:
        return
    surface = app.screen
    width = surface.get_width()
    strip_height = app.session.arena.tile_size
    text_color = pygame.Color(230, 230, 230)
    text_muted = pygame.Color(180, 188, 200)

    overlay = pygame.Surface((width, strip_height), pygame.SRCALPHA)
    overlay.fill((10, 12, 20, 160))
    surface.blit(overlay, (0, 0))

    left_text = f"Round {snapshot.round}   Enemies left: {snapshot.enemies_remaining}"
    left_surface = app.font_regular.render(left_text, True, text_color)
    surface.blit(left_surface, left_surface.get_rect(left=12, centery=strip_height // 2))

    score_text = f"Wins {snapshot.victories} - Losses {snapshot.defeats}"
    if app.soundscape.muted:
        score_text += "   [muted]"
    score_surface = app.font_small.render(score_text, True, text_muted)
    surface.blit(
        score_surface,
        score_surface.get_rect(right=width - 12, centery=strip_height // 2),
    )


def draw_menu_overlay(app, snapshot: RenderSnapshot) -> None:
    if snapshot.phase == PLAYING or snapshot.menu_title is None:
        return
    surface = app.screen
    alpha = 200 if snapshot.round == 0 else 150
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    surface.blit(overlay, (0, 0))

    center_x = surface.get_width() // 2
    if snapshot.menu_options:
        options_top = snapshot.menu_options[0][1].top
    else:
        options_top = surface.get_height() // 2

    title_surface = app.font_large.render(snapshot.menu_title, True, pygame.Color("white"))
    title_rect = title_surface.get_rect(center=(center_x, options_top - 110))
    surface.blit(title_surface, title_rect)

    if snapshot.menu_message:
        message_surface = app.font_regular.render(
            snapshot.menu_message, True, pygame.Color(220, 220, 220)
        )
        message_rect = message_surface.get_rect(center=(center_x, title_rect.bottom + 28))
        surface.blit(message_surface, message_rect)

    for idx, (label, region) in enumerate(snapshot.menu_options):
        is_selected = idx == snapshot.menu_selection
        button = pygame.Rect(region.as_tuple())
        fill = (255, 255, 255, 60) if is_selected else (255, 255, 255, 20)
        highlight = pygame.Surface(button.size, pygame.SRCALPHA)
        highlight.fill(fill)
        surface.blit(highlight, button)
        border = pygame.Color("white") if is_selected else pygame.Color(120, 120, 120)
        pygame.draw.rect(surface, border, button, width=2, border_radius=6)

        color = pygame.Color("white") if is_selected else pygame.Color(200, 200, 200)
        text_surface = app.font_regular.render(label, True, color)
        surface.blit(text_surface, text_surface.get_rect(center=button.center))

    footer_text = "Esc exits the game   |   M toggles sound"
    if snapshot.phase != MENU and app.session.running:
        remaining = app.session.dwell_remaining
        if remaining > 0:
            footer_text = f"Next round in {math.ceil(remaining)}s   |   " + footer_text
    footer_surface = app.font_small.render(footer_text, True, pygame.Color(180, 180, 180))
    footer_rect = footer_surface.get_rect(center=(center_x, surface.get_height() - 36))
    surface.blit(footer_surface, footer_rect)


__all__ = ["draw_hud", "draw_menu_overlay"]
