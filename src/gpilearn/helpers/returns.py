"""
Converts reward sequences into discounted returns.
"""

from typing import Iterable

import numpy as np



def discounted_return(rewards: Iterable[float], discount: float) -> np.ndarray:
    """
    Calculates the return at each timestep of an episode by scanning rewards
    backwards (`d`=discount, `r`=reward, `G`=return):

        `G_t = r_t + d * G_{t+1}`, with `G_T = 0`

    A discount of 1 is allowed. Returns are not normalized, so long episodes
    with a discount near 1 can produce large magnitudes.

    Args:
    * rewards: The rewards r_0 ... r_{T-1} of an episode, in order.
    * discount: The discount level for future rewards. Between 0 and 1.

    Returns:
    * An array of returns, same length and order as `rewards`.
    """
    rewards = np.asarray(list(rewards), dtype=float)
    returns = np.zeros_like(rewards)
    ret = 0.
    for t in range(len(rewards) - 1, -1, -1):
        ret = rewards[t] + discount * ret
        returns[t] = ret
    return returns
