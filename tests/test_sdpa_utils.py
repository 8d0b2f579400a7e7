import os
import shutil
import tempfile
import unittest
from sympy.core.cache import clear_cache
from ncsdpgen import generate_variables, read_sdpa, SdpRelaxation, \
    write_to_sdpa


class SdpaFormat(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.mkdtemp()
        self.filename = os.path.join(self.directory, 'examplenc.dat-s')
        X = generate_variables('X', 2)
        self.sdp = SdpRelaxation(X)
        self.sdp.get_relaxation(2, objective=X[0]*X[1] + X[1]*X[0],
                                inequalities=[-X[1]**2 + X[1] + 0.5],
                                substitutions={X[0]**2: X[0]})

    def tearDown(self):
        shutil.rmtree(self.directory)
        clear_cache()

    def test_header(self):
        write_to_sdpa(self.sdp, self.filename)
        with open(self.filename) as file_:
            lines = file_.readlines()
        self.assertEqual(lines[0], '"file %s generated by ncsdpgen"\n' %
                         self.filename)
        self.assertEqual(lines[1], '36 = number of vars\n')
        self.assertEqual(lines[2], '3 = number of blocs\n')
        self.assertEqual(lines[3], '(-2, 6, 3) = BlocStructure\n')
        self.assertTrue(lines[4].startswith('{0.0, '))
        self.assertTrue(lines[4].endswith('}\n'))
        self.assertEqual(lines[5], '0\t1\t1\t1\t1.0\n')
        self.assertEqual(lines[6], '0\t1\t2\t2\t-1.0\n')
        self.assertEqual(lines[7], '1\t1\t1\t1\t1.0\n')

    def test_round_trip(self):
        self.sdp.write_to_sdpa(self.filename)
        n_vars, block_struct, obj_facvar, entries = read_sdpa(self.filename)
        self.assertEqual(n_vars, self.sdp.n_vars)
        self.assertEqual(block_struct, self.sdp.block_struct)
        self.assertEqual(obj_facvar, self.sdp.obj_facvar)
        expected = [(k, e.block_index, e.row, e.column, e.value)
                    for k in range(self.sdp.n_vars + 1)
                    for e in self.sdp.F[k]]
        self.assertEqual(entries, expected)
        with open(self.filename) as file_:
            lines = file_.readlines()
        self.assertEqual(lines[3], str(tuple(block_struct)) +
                         ' = BlocStructure\n')
        self.assertEqual(lines[4], str(obj_facvar).replace('[', '{')
                         .replace(']', '}') + '\n')

    def test_round_trip_after_compaction(self):
        self.sdp.compact()
        self.sdp.write_to_sdpa(self.filename)
        n_vars, block_struct, obj_facvar, entries = read_sdpa(self.filename)
        self.assertEqual(n_vars, self.sdp.n_vars)
        self.assertEqual(obj_facvar, self.sdp.obj_facvar)
        self.assertEqual(max(entry[0] for entry in entries), n_vars)

    def test_save_monomial_dictionary(self):
        filename = os.path.join(self.directory, 'monomials.txt')
        self.sdp.save_monomial_dictionary(filename)
        with open(filename) as file_:
            lines = [line.split() for line in file_]
        self.assertEqual(lines[0], ['1', '1'])
        self.assertEqual(lines[1], ['2', 'X0'])
        self.assertIn(['%d' % self.sdp.get_variable_index(
            self.sdp.monomials[5]), 'X1^2'], lines)
        self.assertEqual(len(lines), len(self.sdp.monomial_dictionary))


if __name__ == '__main__':
    unittest.main()
