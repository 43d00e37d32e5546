class Direction:
    # Order matters: the walk shuffles this sequence, so a seeded rng depends on it.
    NORTH = 0
    SOUTH = 1
    EAST  = 2
    WEST  = 3

    ALL = (NORTH, SOUTH, EAST, WEST)

    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

    NAMES = {NORTH: "North", SOUTH: "South", EAST: "East", WEST: "West"}
    # Glyphs used by the text dump for cells on an in-progress walk
    ARROWS = {NORTH: "^", SOUTH: "v", EAST: ">", WEST: "<"}

    @classmethod
    def name(cls, direction: int) -> str:
        return cls.NAMES[direction]
