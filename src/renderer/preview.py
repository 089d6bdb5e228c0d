# renderer/preview.py
import numpy as np
import pygame


def image_to_surface(pixels: np.ndarray) -> pygame.Surface:
    """
    Convert an (H, W, 3) uint8 image into a pygame surface.
    pygame's surfarray is indexed [x, y], so the buffer is transposed.
    """
    return pygame.surfarray.make_surface(np.transpose(pixels, (1, 0, 2)))


def show_image(pixels: np.ndarray, title: str = "Ray Tracer") -> None:
    """
    Display a finished render in a window until it is closed or Escape is pressed.
    """
    height, width = pixels.shape[:2]
    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        screen.blit(image_to_surface(pixels), (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
