"""
Defines the `Tabular` value store. A `Tabular` instance holds the estimated
value of each (observation, action) pair and how often each pair was visited.

The API of `Tabular`:

* Methods:
  * index(observation, action): Offset of the pair into the flat tables.
  * update(observation, action, value): Sets a value, returns squared change.
  * visit(observation, action): Increments a visit count.
  * view(): A read-only callable value function over the table.
"""

from .tabular import Tabular, TabularView
