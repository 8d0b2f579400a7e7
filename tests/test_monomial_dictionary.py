import threading
import unittest
from sympy.core.cache import clear_cache
from ncsdpgen import generate_variables, MonomialDictionary, \
    UnregisteredMonomialError
from ncsdpgen.monomial_dictionary import index2linear


class MonomialDictionaryTest(unittest.TestCase):

    def setUp(self):
        self.X = generate_variables('X', 2)

    def tearDown(self):
        clear_cache()

    def test_first_position_wins(self):
        X = self.X
        dictionary = MonomialDictionary()
        self.assertEqual(dictionary.setdefault(X[0]*X[1], (1, 2)), (1, 2))
        self.assertEqual(dictionary.setdefault(X[0]*X[1], (3, 4)), (1, 2))
        self.assertEqual(dictionary[X[0]*X[1]], (1, 2))
        self.assertEqual(len(dictionary), 1)
        self.assertIn(X[0]*X[1], dictionary)
        self.assertNotIn(X[1]*X[0], dictionary)

    def test_missing_monomial(self):
        X = self.X
        dictionary = MonomialDictionary()
        self.assertEqual(dictionary.get(X[0]), None)
        with self.assertRaises(UnregisteredMonomialError) as context:
            dictionary[X[0]*X[1]*X[0]]
        self.assertIn('X0*X1*X0', str(context.exception))

    def test_concurrent_setdefault(self):
        X = self.X
        monomials = [X[0], X[1], X[0]*X[1], X[1]*X[0], X[1]**2]
        dictionary = MonomialDictionary()
        results = [[] for _ in range(8)]

        def worker(thread_id):
            for i in range(200):
                monomial = monomials[i % len(monomials)]
                results[thread_id].append(
                    (monomial, dictionary.setdefault(monomial,
                                                     (thread_id, i))))

        threads = [threading.Thread(target=worker, args=(thread_id,))
                   for thread_id in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(dictionary), len(monomials))
        for result in results:
            for monomial, position in result:
                self.assertEqual(position, dictionary[monomial])

    def test_index2linear(self):
        n_monomials = 6
        indices = set(index2linear(row, column, n_monomials)
                      for row in range(n_monomials)
                      for column in range(n_monomials))
        self.assertEqual(indices, set(range(1, n_monomials**2 + 1)))
        self.assertEqual(index2linear(0, 0, n_monomials), 1)


if __name__ == '__main__':
    unittest.main()
