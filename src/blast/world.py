import random

from esper import World


def create_world(rng: random.Random | None = None) -> World:
    """Create an empty ECS world carrying the random source used for tile colors."""
    world = World()
    setattr(world, "random", rng or random.Random())
    return world


def world_random(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if isinstance(rng, random.Random):
        return rng
    rng = random.Random()
    setattr(world, "random", rng)
    return rng
