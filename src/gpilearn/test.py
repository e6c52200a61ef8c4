import unittest

from .agent.test import *
from .algorithm.test import *
from .approximator.test import *
from .environment.test import *
from .helpers.test import *



if __name__ == '__main__':
    unittest.main(verbosity=0)
