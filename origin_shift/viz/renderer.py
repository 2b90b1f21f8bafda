import logging
import numpy as np
import pygame
from origin_shift.core.maze import OriginShiftMaze
from origin_shift.core.wallified import WallifiedView
from origin_shift.viz.image import render_image
from origin_shift.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_HUD = (255, 255, 255)

    def __init__(self, maze: OriginShiftMaze, generator=None, width=1280, height=720,
                 record=False, steps_per_frame=1, highlight=None):
        self.maze = maze
        self.generator = generator
        self.screen_width = width
        self.screen_height = height
        self.steps_per_frame = steps_per_frame
        self.highlight = highlight

        # Camera
        self.cell_size = 20.0  # Pixels per wallified cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_finished = False

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire maze on screen with padding."""
        padding = 40
        rows, cols = WallifiedView(self.maze).get_size()

        zoom_x = (self.screen_width - padding * 2) / cols
        zoom_y = (self.screen_height - padding * 2) / rows
        self.cell_size = max(1.0, min(zoom_x, zoom_y))

        self.offset_x = (self.screen_width - cols * self.cell_size) / 2
        self.offset_y = (self.screen_height - rows * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Origin Shift - {self.maze.rows}x{self.maze.columns}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_f:
                self.fit_to_screen()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(100.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw_maze(self):
        self.surface.fill(self.COLOR_BG)

        img = render_image(self.maze, highlight=self.highlight)
        # surfarray is indexed (x, y)
        maze_surface = pygame.surfarray.make_surface(np.transpose(img, (1, 0, 2)))

        h, w = img.shape[:2]
        size = (int(w * self.cell_size), int(h * self.cell_size))
        scaled = pygame.transform.scale(maze_surface, size)
        self.surface.blit(scaled, (int(self.offset_x), int(self.offset_y)))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        row, col = self.maze.get_origin()
        status = "Done" if self.gen_finished else "Running"
        steps = self.generator.step_count if self.generator else 0
        info = [
            f"FPS: {fps}",
            f"Size: {self.maze.rows}x{self.maze.columns}",
            f"Origin: ({row}, {col})",
            f"Steps: {steps:,}",
            f"Status: {status}",
            "REC" if self.recorder.active else "",
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_HUD)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def step_generator(self, gen_iter):
        try:
            for _ in range(self.steps_per_frame):
                next(gen_iter)
        except StopIteration:
            self.gen_finished = True
            logger.info("Generator finished")

    def run_loop(self):
        gen_iter = self.generator.run() if self.generator else None

        while self.running:
            self.handle_input()

            if gen_iter and not self.gen_finished:
                self.step_generator(gen_iter)

            self.draw_maze()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                frame = np.transpose(pygame.surfarray.array3d(self.surface), (1, 0, 2))
                self.recorder.capture_frame(frame)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
