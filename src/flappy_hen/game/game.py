# src/flappy_hen/game/game.py
import sys, argparse
import pygame
from pygame import K_ESCAPE
from .config import (
    FIELD_WIDTH, FIELD_HEIGHT, FPS, ENTITY_X, ENTITY_SIZE, OBSTACLE_WIDTH,
    COLOR_SKY, COLOR_FG, COLOR_HEN, COLOR_HEN_DEAD, COLOR_TRUNK, COLOR_LEAVES,
    COLOR_OVERLAY, COLOR_BUTTON, COLOR_BUTTON_TXT, SEED_DEFAULT, DEBUG_TICK_LOGS
)
from .frames import FrameScheduler
from .input_router import InputRouter, RESTART_BUTTON
from .session import Phase, Session, SessionState

LEAVES_H = 30


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Hen")
    p.add_argument("--seed", type=int, default=None,
                   help="Tree layout seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--sound", type=str, default="",
                   help="Optional sound file played on every jump.")
    p.add_argument("--debug", action="store_true",
                   help="Print the session state twice per second.")
    return p.parse_args(argv)


def make_jump_cue(sound_path: str):
    """Fire-and-forget jump sound. Audio problems never reach the game."""
    if not sound_path:
        return None
    try:
        if pygame.mixer.get_init() is None:
            pygame.mixer.init()
        sound = pygame.mixer.Sound(sound_path)
    except (pygame.error, FileNotFoundError) as e:
        print(f"Sound disabled: {e}")
        return None

    def play():
        try:
            sound.stop()
            sound.play()
        except pygame.error as e:
            print(f"Sound error: {e}")
    return play


def _blit_centered(surf: pygame.Surface, text: pygame.Surface, y: int):
    surf.blit(text, (FIELD_WIDTH // 2 - text.get_width() // 2, y))


def draw(surf: pygame.Surface, state: SessionState, font: pygame.font.Font, big_font: pygame.font.Font):
    """Render one snapshot. Read-only with respect to the session."""
    surf.fill(COLOR_SKY)

    # Trees: trunk with a leafy cap facing the gap
    trunk_w = OBSTACLE_WIDTH // 2
    for ob in state.obstacles:
        upper, lower = ob.upper_rect(), ob.lower_rect()
        trunk_x = upper.x + (OBSTACLE_WIDTH - trunk_w) // 2
        pygame.draw.rect(surf, COLOR_TRUNK, (trunk_x, 0, trunk_w, upper.height))
        pygame.draw.rect(surf, COLOR_LEAVES, (upper.x, upper.bottom - LEAVES_H, OBSTACLE_WIDTH, LEAVES_H),
                         border_bottom_left_radius=14, border_bottom_right_radius=14)
        pygame.draw.rect(surf, COLOR_TRUNK, (trunk_x, lower.y, trunk_w, lower.height))
        pygame.draw.rect(surf, COLOR_LEAVES, (lower.x, lower.y, OBSTACLE_WIDTH, LEAVES_H),
                         border_top_left_radius=14, border_top_right_radius=14)

    # Hen
    alive = state.phase is not Phase.TERMINATED
    hen = state.entity.rect
    pygame.draw.ellipse(surf, COLOR_HEN if alive else COLOR_HEN_DEAD, hen)
    pygame.draw.circle(surf, (255, 255, 255), (ENTITY_X + ENTITY_SIZE - 9, hen.y + 10), 4)
    pygame.draw.circle(surf, (0, 0, 0), (ENTITY_X + ENTITY_SIZE - 8, hen.y + 10), 2)
    pygame.draw.polygon(surf, (251, 146, 60), [
        (hen.right - 2, hen.centery - 3), (hen.right + 8, hen.centery), (hen.right - 2, hen.centery + 3)
    ])

    # HUD
    surf.blit(font.render(f"Score: {state.score}", True, COLOR_FG), (12, 10))

    if state.phase is not Phase.RUNNING:
        veil = pygame.Surface((FIELD_WIDTH, FIELD_HEIGHT), pygame.SRCALPHA)
        veil.fill(COLOR_OVERLAY)
        surf.blit(veil, (0, 0))

    if state.phase is Phase.IDLE:
        _blit_centered(surf, big_font.render("Click or press Space", True, (255, 255, 255)), FIELD_HEIGHT // 2 - 40)
        _blit_centered(surf, font.render("to start", True, (255, 255, 255)), FIELD_HEIGHT // 2)
    elif state.phase is Phase.TERMINATED:
        _blit_centered(surf, big_font.render("Game Over", True, (255, 255, 255)), FIELD_HEIGHT // 2 - 60)
        _blit_centered(surf, font.render(f"Score: {state.score}", True, (255, 255, 255)), FIELD_HEIGHT // 2 - 10)
        pygame.draw.rect(surf, COLOR_BUTTON, RESTART_BUTTON, border_radius=24)
        btn_txt = font.render("Restart", True, COLOR_BUTTON_TXT)
        surf.blit(btn_txt, (RESTART_BUTTON.centerx - btn_txt.get_width() // 2,
                            RESTART_BUTTON.centery - btn_txt.get_height() // 2))


def run(argv=None):
    args = parse_args(argv)

    # Resolve seed: None -> SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed
    debug = DEBUG_TICK_LOGS or args.debug
    _print_timer = 0.0 if debug else None

    pygame.init()
    pygame.display.set_caption("Flappy Hen")
    screen = pygame.display.set_mode((FIELD_WIDTH, FIELD_HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 20)
    big_font = pygame.font.SysFont("jetbrainsmono", 30, bold=True)

    scheduler = FrameScheduler()
    session = Session(scheduler, seed=launch_seed)
    # Registered once for the whole window
    router = InputRouter(session, on_jump=make_jump_cue(args.sound))
    print(f"Flappy Hen ready (seed={session.seed}). Click or press SPACE to start.")

    last_phase = session.phase
    try:
        while True:
            dt = clock.tick(FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN and event.key == K_ESCAPE:
                    return
                router.handle_event(event)

            scheduler.run_frame()
            state = session.snapshot()

            if state.phase is not last_phase:
                if state.phase is Phase.TERMINATED:
                    print(f"[{state.phase.value}] score={state.score} cause={state.death_cause} ticks={session.ticks}")
                else:
                    print(f"[{state.phase.value}] seed={session.seed}")
                last_phase = state.phase

            if _print_timer is not None and state.phase is Phase.RUNNING:
                _print_timer -= dt
                if _print_timer <= 0.0:
                    _print_timer = 0.5  # print twice per second
                    gaps = " ".join(f"x={o.x:.0f}/gap={o.gap_top:.0f}{'*' if o.passed else ''}" for o in state.obstacles)
                    print(f"TICK {session.ticks} y={state.entity.position:.1f} v={state.entity.velocity:+.2f} "
                          f"score={state.score} | {gaps}")

            draw(screen, state, font, big_font)
            pygame.display.flip()
    finally:
        session.close()
        pygame.quit()


def main():
    run()
    sys.exit(0)


if __name__ == "__main__":
    main()
