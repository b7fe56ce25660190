import pygame
from pygame import Surface

BLACK = (0, 0, 0)


class Renderer:
    def __init__(self, screen: Surface, clear_color=BLACK):
        self.screen = screen
        self.clear_color = clear_color

    @property
    def size(self):
        return self.screen.get_size()

    def clear(self):
        self.screen.fill(self.clear_color)

    def create_surface(self, width, height):
        return pygame.Surface((width, height), pygame.SRCALPHA, 32)

    def submit_surface(self, surface: Surface, x=0, y=0):
        self.screen.blit(surface, (x, y))

    def show(self):
        pygame.display.flip()

    def submit_centered(self, surface: Surface, center=None):
        if center is None:
            width, height = self.size
            center = width // 2, height // 2

        w, h = surface.get_size()
        self.submit_surface(surface, center[0] - w // 2, center[1] - h // 2)
