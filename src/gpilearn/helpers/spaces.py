"""
Defines `DiscreteDomain`, the closed, ordered enumeration of actions or
observations that every tabular estimator indexes into.

Defines functions that enumerate discrete `gymnasium.spaces` instances and
convert their samples to and from hashable domain elements.
"""

from itertools import product
from typing import Any, Hashable, Iterable, Iterator, List, Tuple

import numpy as np
from gymnasium.spaces import Box, Discrete, MultiBinary, MultiDiscrete, Space
from gymnasium.spaces import Tuple as TupleSpace

from ..exceptions import DomainError



class DiscreteDomain:
    """
    A finite, ordered and immutable set of elements. Each element maps to a
    stable integer index: its position in the enumeration. Elements must be
    hashable and unique. Any iterable works, including an `enum.Enum` class.

    Args:
    * elements: The ordered elements of the domain.
    * name (str): A label used in error messages and reports.
    """

    def __init__(self, elements: Iterable[Hashable], name: str='domain'):
        self.name = name
        self.elements = tuple(elements)
        self._positions = {}
        for position, element in enumerate(self.elements):
            if element in self._positions:
                raise ValueError('Duplicate element in {}: {!r}'.format(name, element))
            self._positions[element] = position


    @classmethod
    def from_space(cls, space: Space, name: str='domain') -> 'DiscreteDomain':
        """
        Enumerates a discrete `gymnasium` space into a domain. `Discrete`
        spaces enumerate to ints, composite spaces to flat tuples of ints.

        Args:
        * space: A `Discrete`, `MultiDiscrete`, `MultiBinary`, integer `Box`
        or `Tuple` of those.
        * name (str): Label of the domain.

        Returns:
        * A `DiscreteDomain` whose elements are in the same form as
        `to_element(space, space.sample())`.
        """
        if isinstance(space, Discrete):
            return cls(range(int(space.start), int(space.start) + int(space.n)), name)
        return cls(enumerate_discrete_space(space), name)


    def index(self, element: Hashable) -> int:
        """
        Position of `element` in the enumeration.

        Raises:
        * `DomainError` if the element is not a member of the domain.
        """
        try:
            return self._positions[element]
        except (KeyError, TypeError):
            raise DomainError('{!r} is not a member of {}.'.format(element,\
                              self.name)) from None


    def to_space(self) -> Discrete:
        """
        The `gymnasium.spaces.Discrete` space of the element indices.
        """
        return Discrete(len(self.elements))


    def __len__(self) -> int:
        return len(self.elements)


    def __iter__(self) -> Iterator:
        return iter(self.elements)


    def __contains__(self, element) -> bool:
        try:
            return element in self._positions
        except TypeError:
            return False


    def __getitem__(self, position: int):
        return self.elements[position]


    def __eq__(self, other) -> bool:
        if not isinstance(other, DiscreteDomain):
            return NotImplemented
        return self.elements == other.elements


    def __hash__(self) -> int:
        return hash(self.elements)


    def __repr__(self) -> str:
        return '{}({}, {} elements)'.format(self.__class__.__name__, self.name,\
                                           len(self.elements))



def enumerate_discrete_space(space: Space, prod: bool=True) -> List[Tuple[int]]:
    """
    Generates a list of space coordinate tuples corresponding to the discrete
    space. i.e a (2,2) `MultiDiscrete` space becomes
    [(0,0), (0,1), (1,0), (1,1)].

    Args:
    * space: A discrete space instance from `gymnasium.spaces`.
    * prod: Whether to return a product or individual enumerations of variables.
    For e.g for MultiBinary(2) with product: (0,0), (0,1), (1,0), (1,1) and
    without product: [(0,1), (0,1)].

    Returns:
    * Either a list of tuples of coordinates for each point in the space, or a
    list of tuples enumerating each variable in the space individually.

    Raises:
    * `ValueError` for spaces with continuous variables.
    """
    if isinstance(space, Discrete):
        start = int(space.start)
        linspaces = [tuple(range(start, start + int(space.n)))]
    elif isinstance(space, MultiBinary):
        linspaces = [(0, 1)] * int(np.prod(space.shape))
    elif isinstance(space, MultiDiscrete):
        starts = np.ravel(getattr(space, 'start', np.zeros_like(space.nvec)))
        linspaces = [tuple(range(int(s), int(s) + int(n))) for s, n in \
                    zip(starts, np.ravel(space.nvec))]
    elif isinstance(space, Box) and np.issubdtype(space.dtype, np.integer):
        linspaces = [tuple(range(int(l), int(h) + 1)) for l, h in \
                    zip(space.low.ravel(), space.high.ravel())]
    elif isinstance(space, TupleSpace):
        linspaces = []
        for subspace in space.spaces:
            linspaces.extend(enumerate_discrete_space(subspace, False))
    else:
        raise ValueError('Cannot enumerate space: {}'.format(space))
    return list(product(*linspaces)) if prod else linspaces



def len_space_tuple(space: Space) -> int:
    """
    Calculates the length of the flattened tuple generated from a sample from
    space. For e.g. TupleSpace((MultiDiscrete([3,4]), MultiBinary(2))) -> 4
    """
    if isinstance(space, Discrete):
        return 1
    elif isinstance(space, (MultiBinary, MultiDiscrete, Box)):
        return int(np.prod(space.shape))
    elif isinstance(space, TupleSpace):
        return sum(len_space_tuple(subspace) for subspace in space.spaces)
    raise ValueError('Unsupported space: {}'.format(space))



def to_element(space: Space, sample: Any) -> Hashable:
    """
    Converts a sample from one of `gymnasium.spaces` instances into a hashable
    domain element. `Discrete` samples become ints, everything else a flat
    tuple of ints.

    Args:
    * space (Space): Space instance describing the sample.
    * sample: The sample (`space.sample()` result type).

    Returns:
    * An int or a flat tuple of ints.
    """
    if isinstance(space, Discrete):
        return int(sample)
    elif isinstance(space, (MultiBinary, MultiDiscrete, Box)):
        return tuple(int(x) for x in np.asarray(sample).ravel())
    elif isinstance(space, TupleSpace):
        flattened = []
        for subspace, subsample in zip(space.spaces, sample):
            element = to_element(subspace, subsample)
            flattened.extend(element if isinstance(element, tuple) else (element,))
        return tuple(flattened)
    raise ValueError('Unsupported space: {}'.format(space))



def to_sample(space: Space, element: Hashable) -> Any:
    """
    Reconstructs a `gymnasium.spaces` sample from a domain element. Reverse of
    `to_element`.

    Args:
    * space (Space): Space instance describing the sample.
    * element: An int for `Discrete` spaces, a flat tuple otherwise.

    Returns:
    * Any one of int, np.ndarray, tuple depending on space.
    """
    if isinstance(space, Discrete):
        return int(element)
    elif isinstance(space, (MultiBinary, MultiDiscrete, Box)):
        return np.asarray(element, dtype=space.dtype).reshape(space.shape)
    elif isinstance(space, TupleSpace):
        aggregate = []
        i = 0
        for subspace in space.spaces:
            size = len_space_tuple(subspace)
            chunk = element[i:i+size]
            aggregate.append(to_sample(subspace, chunk[0] if \
                             isinstance(subspace, Discrete) else chunk))
            i += size
        return tuple(aggregate)
    raise ValueError('Unsupported space: {}'.format(space))
