import dataclasses
import unittest

import numpy as np

from ..agent import Agent, EpsilonGreedyAgent
from ..agent.test import ScriptedRandom
from ..approximator import Tabular
from ..environment import Environment
from ..environment.dummy import DummyBandit, DummyChain, DummyEmpty, DummyRover, Move
from ..exceptions import ConfigurationError, TrajectoryError
from ..helpers.spaces import DiscreteDomain
from .convergence import ConvergenceWindow
from .estimator import EstimatorConfig, TrainingState, run_episode_loop
from .montecarlo import FirstVisitMonteCarlo, EveryVisitMonteCarlo,\
                        IncrementalMonteCarlo, ConstantAlphaMonteCarlo,\
                        monte_carlo_episode, first_visit, every_visit,\
                        incremental, constant_alpha
from .temporaldifference import QLearning, SARSA, ExpectedSARSA,\
                                temporal_difference_episode, q_learning, sarsa,\
                                expected_sarsa
from .trajectory import Step, Final, generate_trajectory, steps_of, rewards_of,\
                        pair_of



class FixedAgent(Agent):
    """
    Always takes the same action and records the observations each policy
    improvement was requested for.
    """

    def __init__(self, action):
        self.action = action
        self.improvements = []


    def act(self, observation):
        return self.action


    def policy_improvement(self, value_function, observations=None):
        self.improvements.append(None if observations is None else tuple(observations))


    def action_probability(self, action, observation):
        return float(action == self.action)



class Scripted(Environment):
    """
    Replays a fixed list of (observation, reward) pairs whatever the agent
    does, then ends at `final`.
    """

    def __init__(self, script, final=2):
        super().__init__(DiscreteDomain((0, 1, 2), 'scripted'), DiscreteDomain(('x', 'y')))
        self.script = list(script)
        self.final = final
        self.t = 0


    def reset(self):
        self.t = 0


    def get_observation(self, agent):
        return self.script[self.t][0] if self.t < len(self.script) else None


    def receive_action(self, agent, action):
        reward = self.script[self.t][1]
        self.t += 1
        return reward


    def final_observation(self, agent):
        return self.final



class Rebuilt(Scripted):
    """
    A `Scripted` environment constructed anew for every episode.
    """

    def __init__(self, script, generation=0):
        super().__init__(script)
        self.generation = generation


    def start_episode(self):
        return Rebuilt(self.script, self.generation + 1)



ESTIMATORS = (lambda: FirstVisitMonteCarlo(1., 2000),
              lambda: EveryVisitMonteCarlo(1., 2000),
              lambda: IncrementalMonteCarlo(1., 2000),
              lambda: ConstantAlphaMonteCarlo(0.1, 1., 2000),
              lambda: QLearning(0.1, 1., 2000),
              lambda: SARSA(0.1, 1., 2000),
              lambda: ExpectedSARSA(0.1, 1., 2000))



class TestTrajectory(unittest.TestCase):


    def test_generate(self):
        env, trajectory = generate_trajectory(DummyChain(), FixedAgent(Move.RIGHT))
        self.assertEqual(trajectory, [Step(1, Move.RIGHT, 10.), Final(2)])
        self.assertEqual(rewards_of(trajectory), [10.])
        self.assertEqual(pair_of(trajectory[0]), (1, Move.RIGHT))


    def test_generate_restarts(self):
        env = DummyRover()
        env.receive_action(None, Move.LEFT)
        _, trajectory = generate_trajectory(env, FixedAgent(Move.LEFT))
        self.assertEqual([e.observation for e in trajectory], [3, 2, 1, 0])
        self.assertEqual(rewards_of(trajectory), [0., 0., 1.])


    def test_empty_episode(self):
        env = DummyEmpty()
        returned, trajectory = generate_trajectory(env, FixedAgent(0))
        self.assertIs(returned, env)
        self.assertEqual(trajectory, [Final(0)])
        self.assertEqual(steps_of(trajectory), [])
        self.assertEqual(rewards_of(trajectory), [])


    def test_invalid_trajectory(self):
        for trajectory in ([], [Step(0, 'x', 1.)], [Final(0), Step(0, 'x', 1.), Final(1)]):
            with self.assertRaises(TrajectoryError):
                steps_of(trajectory)
        with self.assertRaises(TrajectoryError):
            pair_of(Final(0))
        # TrajectoryErrors are RuntimeErrors
        with self.assertRaises(RuntimeError):
            pair_of(Final(0))



class TestConvergence(unittest.TestCase):


    def test_window(self):
        window = ConvergenceWindow(5)
        self.assertFalse(window.converged)
        for _ in range(4):
            window.append(0.)
            self.assertFalse(window.converged)
        window.append(0.)
        self.assertTrue(window.converged)
        window.append(1.)
        self.assertFalse(window.converged)
        self.assertEqual(len(window), 5)


    def test_tolerance(self):
        window = ConvergenceWindow(2, tolerance=0.1)
        window.extend((0.1, 0.05))
        self.assertTrue(window.converged)


    def test_episode_loop(self):
        config = EstimatorConfig(discount=1., episode_limit=100)
        self.assertEqual(run_episode_loop(config, lambda: 0.), 5)
        self.assertEqual(run_episode_loop(config, lambda: 1.), 100)
        variations = iter([1., 1., 0., 0., 0., 0., 0., 1.])
        self.assertEqual(run_episode_loop(config, lambda: next(variations)), 7)
        calls = []
        config = EstimatorConfig(discount=1., episode_limit=0)
        self.assertEqual(run_episode_loop(config, lambda: calls.append(1) or 0.), 0)
        self.assertEqual(calls, [])



class TestEstimatorConfig(unittest.TestCase):


    def test_validation(self):
        invalid = (dict(discount=1.5), dict(discount=-0.1), dict(episode_limit=-1),
                   dict(alpha=0.), dict(alpha=1.5), dict(steps=0), dict(window=0))
        for params in invalid:
            params = dict(dict(discount=0.9, episode_limit=10), **params)
            with self.assertRaises(ConfigurationError):
                EstimatorConfig(**params)
        with self.assertRaises(ValueError):
            QLearning(alpha=2., discount=1., episode_limit=10)
        for make in (lambda: QLearning(None, 1., 5), lambda: SARSA(None, 1., 5),
                     lambda: ExpectedSARSA(None, 1., 5),
                     lambda: ConstantAlphaMonteCarlo(None, 1., 5)):
            with self.assertRaises(ConfigurationError):
                make()
        config = EstimatorConfig(discount=0., episode_limit=0, alpha=1.)
        self.assertEqual(config.steps, 1)
        self.assertEqual(config.window, 5)


    def test_frozen(self):
        config = EstimatorConfig(discount=0.9, episode_limit=10)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.discount = 0.5



class TestMonteCarlo(unittest.TestCase):


    def run_episode(self, env, update, alpha=None, discount=1., state=None):
        config = EstimatorConfig(discount=discount, episode_limit=1, alpha=alpha)
        if state is None:
            agent = FixedAgent('x')
            state = TrainingState(env, agent, Tabular(env.observations, env.actions))
        state.environment = env
        monte_carlo_episode(state, config, update)
        return state


    def test_first_visit(self):
        state = self.run_episode(Scripted([(0, 1.), (0, 1.)]), first_visit)
        self.assertEqual(state.table[0, 'x'], 2.)
        self.assertEqual(state.table.visits[state.table.index(0, 'x')], 1)
        self.assertEqual(state.agent.improvements, [None])


    def test_every_visit(self):
        state = self.run_episode(Scripted([(0, 1.), (0, 1.)]), every_visit)
        self.assertEqual(state.table[0, 'x'], 1.5)
        self.assertEqual(state.table.visits[state.table.index(0, 'x')], 2)
        self.assertEqual(state.returns[state.table.index(0, 'x')], 3.)


    def test_discounted_visits(self):
        state = self.run_episode(Scripted([(0, 4.), (1, 2.)]), every_visit, discount=0.5)
        self.assertEqual(state.table[0, 'x'], 5.)
        self.assertEqual(state.table[1, 'x'], 2.)
        self.assertEqual(state.table[0, 'y'], 0.)


    def test_incremental(self):
        state = None
        for reward in (3., 5., 10.):
            state = self.run_episode(Scripted([(0, reward)]), incremental, state=state)
        self.assertAlmostEqual(state.table[0, 'x'], 6.)
        self.assertEqual(state.table.visits[state.table.index(0, 'x')], 3)


    def test_constant_alpha(self):
        state = self.run_episode(Scripted([(1, 10.)]), constant_alpha, alpha=0.1)
        self.assertAlmostEqual(state.table[1, 'x'], 1.)
        self.run_episode(Scripted([(1, 10.)]), constant_alpha, alpha=0.1, state=state)
        self.assertAlmostEqual(state.table[1, 'x'], 1.9)


    def test_empty_episodes(self):
        for estimator in (FirstVisitMonteCarlo(1., 100), EveryVisitMonteCarlo(1., 100),
                          IncrementalMonteCarlo(1., 100),
                          ConstantAlphaMonteCarlo(0.5, 1., 100)):
            agent = FixedAgent(0)
            estimator.policy_search(DummyEmpty(), agent)
            self.assertEqual(estimator.episodes, 5)
            self.assertTrue(np.all(estimator.table.table() == 0.))
            self.assertTrue(np.all(estimator.table.table(visits=True) == 0))
            self.assertEqual(agent.improvements, [None] * 5)



class TestTemporalDifference(unittest.TestCase):


    def setUp(self):
        self.env = Scripted([(0, 1.), (1, 2.)])
        self.agent = FixedAgent('x')
        self.state = TrainingState(self.env, self.agent,
                                   Tabular(self.env.observations, self.env.actions))


    def test_terminal_bootstrap(self):
        self.state.table[1, 'x'] = 7.
        for bootstrap in (q_learning, sarsa, expected_sarsa):
            self.assertEqual(bootstrap(self.state, None), 0.)


    def test_q_learning_episode(self):
        config = EstimatorConfig(discount=1., episode_limit=1, alpha=0.5)
        temporal_difference_episode(self.state, config, q_learning)
        self.assertEqual(self.state.table[0, 'x'], 0.5)
        self.assertEqual(self.state.table[1, 'x'], 1.)
        # one improvement per update, for the updated observation
        self.assertEqual(self.agent.improvements, [(0,), (1,)])


    def test_n_step(self):
        env = Scripted([(0, 1.), (1, 2.), (2, 4.)])
        self.state.environment = env
        config = EstimatorConfig(discount=0.5, episode_limit=1, alpha=1., steps=2)
        temporal_difference_episode(self.state, config, sarsa)
        self.assertEqual(self.state.table[0, 'x'], 1. + 0.5 * 2.)
        self.assertEqual(self.state.table[1, 'x'], 2. + 0.5 * 4.)
        self.assertEqual(self.state.table[2, 'x'], 4.)


    def test_greedy_agreement(self):
        table = self.state.table
        table[1, 'x'] = 3.
        table[1, 'y'] = 5.
        agent = EpsilonGreedyAgent(0., self.env.observations, self.env.actions,
                                   rng=ScriptedRandom())
        agent.policy_improvement(table.view())
        self.state.agent = agent
        next_step = Step(1, agent.act(1), 0.)
        self.assertEqual(next_step.action, 'y')
        values = [b(self.state, next_step) for b in (q_learning, sarsa, expected_sarsa)]
        self.assertEqual(values, [5., 5., 5.])


    def test_expected_sarsa_exploration(self):
        table = self.state.table
        table[1, 'x'] = 3.
        table[1, 'y'] = 5.
        agent = EpsilonGreedyAgent(0.5, self.env.observations, self.env.actions,
                                   rng=ScriptedRandom())
        agent.policy_improvement(table.view())
        self.state.agent = agent
        # 0.25 * 3 + 0.75 * 5
        self.assertAlmostEqual(expected_sarsa(self.state, Step(1, 'x', 0.)), 4.5)


    def test_empty_episode(self):
        self.state.environment = DummyEmpty()
        config = EstimatorConfig(discount=1., episode_limit=1, alpha=0.5)
        self.assertEqual(temporal_difference_episode(self.state, config, sarsa), 0.)
        self.assertEqual(self.agent.improvements, [])



class TestPolicySearch(unittest.TestCase):


    def test_chain(self):
        for make in ESTIMATORS:
            env = DummyChain()
            agent = EpsilonGreedyAgent(0.05, env.observations, env.actions, rng=0)
            estimator = make()
            estimator.policy_search(env, agent)
            self.assertEqual(agent.recommend(1), Move.RIGHT, str(estimator))
            self.assertGreater(estimator.table[1, Move.RIGHT],\
                               estimator.table[1, Move.LEFT], str(estimator))
            self.assertLessEqual(estimator.episodes, 2000)


    def test_chain_values(self):
        for estimator in (FirstVisitMonteCarlo(1., 500), EveryVisitMonteCarlo(1., 500),
                          IncrementalMonteCarlo(1., 500)):
            env = DummyChain()
            agent = EpsilonGreedyAgent(0.05, env.observations, env.actions, rng=0)
            estimator.policy_search(env, agent)
            self.assertAlmostEqual(estimator.table[1, Move.RIGHT], 10.)


    def test_bandit(self):
        env = DummyBandit(rng=1)
        agent = EpsilonGreedyAgent(0.05, env.observations, env.actions, rng=0)
        estimator = ConstantAlphaMonteCarlo(0.05, 1., 10000)
        estimator.policy_search(env, agent)
        self.assertEqual(agent.policy.greedy(0), 2)
        self.assertAlmostEqual(agent.action_probability(2, 0), 0.95 + 0.05 / 3)
        self.assertAlmostEqual(estimator.table[0, 2], 3., delta=1.)


    def test_rebuilt_environment(self):
        env = Rebuilt([(0, 1.), (1, 2.)])
        estimator = QLearning(0.5, 1., 3)
        estimator.policy_search(env, FixedAgent('x'))
        self.assertEqual(estimator.episodes, 3)
        self.assertEqual(estimator.state.environment.generation, 3)
        self.assertEqual(env.generation, 0)


    def test_single_use(self):
        estimator = SARSA(0.5, 1., 3)
        self.assertIsNone(estimator.table)
        estimator.policy_search(DummyChain(), FixedAgent(Move.RIGHT))
        self.assertIsInstance(estimator.table, Tabular)
        with self.assertRaises(RuntimeError):
            estimator.policy_search(DummyChain(), FixedAgent(Move.RIGHT))


    def test_logging(self):
        with self.assertLogs('gpilearn.algorithm.estimator', level='INFO') as logs:
            FirstVisitMonteCarlo(1., 100).policy_search(DummyEmpty(), FixedAgent(0))
        self.assertIn('INFO:gpilearn.algorithm.estimator:'
                      'FirstVisitMonteCarlo: converged in 5 episodes.', logs.output)
        with self.assertLogs('gpilearn.algorithm.estimator', level='INFO') as logs:
            QLearning(0.1, 1., 3).policy_search(DummyChain(), FixedAgent(Move.LEFT))
        self.assertIn('INFO:gpilearn.algorithm.estimator:'
                      'QLearning: stopped at the episode limit (3).', logs.output)


    def test_debug_tables(self):
        with self.assertLogs('gpilearn.algorithm', level='DEBUG') as logs:
            EveryVisitMonteCarlo(1., 2).policy_search(DummyChain(), FixedAgent(Move.RIGHT))
        messages = '\n'.join(logs.output)
        self.assertIn('Returns', messages)
        self.assertIn('Observation Visit Count', messages)
        self.assertIn('Action Value Function', messages)



if __name__ == '__main__':
    unittest.main(verbosity=0)
