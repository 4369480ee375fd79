"""
Utility functions for identity and initial pixel generation
"""
import random
import uuid


def generate_participant_id() -> str:
    """Generate a globally unique participant ID"""
    return str(uuid.uuid4())


def random_pixel(max_value: int) -> int:
    """
    Pick an initial pixel value

    Half the pixels start off. With a one-bit range the rest are on; with a
    wider range an on pixel is fully lit 75% of the time and takes a random
    intermediate intensity otherwise.
    """
    if random.random() > 0.5:
        if max_value == 1 or random.random() > 0.25:
            return max_value
        return random.randrange(max_value)
    return 0
