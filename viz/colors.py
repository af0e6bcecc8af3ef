WHITE = (230, 230, 230)
GREY = (120, 120, 120)
GREEN = (0, 200, 0)
DIM_GREEN = (0, 110, 0)
AMBER = (255, 191, 0)
RED = (230, 40, 40)
YELLOW = (255, 255, 0)
BLUE = (128, 128, 255)
LIGHT_GREEN = (128, 255, 128)
