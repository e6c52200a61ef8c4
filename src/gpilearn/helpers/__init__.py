"""
Defines helper functions and classes shared by agents, environments and
algorithms:

* `DiscreteDomain`, a closed enumeration of actions or observations, and
functions converting `gymnasium` discrete spaces into domains. See `spaces`.
* `discounted_return` for converting rewards into returns. See `returns`.
"""

from . import spaces
from .spaces import DiscreteDomain
from .returns import discounted_return
