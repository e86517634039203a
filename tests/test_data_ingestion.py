import unittest
from unittest.mock import Mock, patch
import numpy as np
import pandas as pd

from flownet.data_ingestion import DataIngestion, load_capacity_matrix, load_edge_list
from flownet.exceptions import InvalidNetworkError
from flownet.graph_manager import GraphManager

def sample_edges() -> pd.DataFrame:
    """Small labelled network: max flow s -> t is 5."""
    return pd.DataFrame([
        {'from': 's', 'to': 'a', 'capacity': 3},
        {'from': 's', 'to': 'b', 'capacity': 2},
        {'from': 'a', 'to': 'b', 'capacity': 1},
        {'from': 'a', 'to': 't', 'capacity': 2},
        {'from': 'b', 'to': 't', 'capacity': 3},
        {'from': 'a', 'to': 't', 'capacity': 1},
        {'from': 'x', 'to': 't', 'capacity': 0},
    ])

class TestDataIngestion(unittest.TestCase):
    """
    Test conversion of labelled edge lists and matrices into capacity matrices.

    Verifies:
    1. Labels map to dense ids in first-appearance order
    2. Parallel edges are summed and zero capacities dropped
    3. Malformed capacities raise InvalidNetworkError
    """

    def test_label_mapping(self):
        ingestion = DataIngestion(sample_edges())

        self.assertEqual(ingestion.node_to_id, {'s': 0, 'a': 1, 'b': 2, 't': 3, 'x': 4})
        self.assertEqual(ingestion.get_id_for_node('t'), 3)
        self.assertEqual(ingestion.get_node_for_id(4), 'x')
        self.assertIsNone(ingestion.get_id_for_node('missing'))
        self.assertEqual(ingestion.label_path([0, 1, 3]), ['s', 'a', 't'])

    def test_capacity_matrix(self):
        ingestion = DataIngestion(sample_edges())

        self.assertEqual(ingestion.capacity_matrix, [
            [0, 3, 2, 0, 0],
            [0, 0, 1, 3, 0],
            [0, 0, 0, 3, 0],
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
        ])
        for row in ingestion.capacity_matrix:
            for capacity in row:
                self.assertIsInstance(capacity, int)

    def test_integral_float_capacities(self):
        df = pd.DataFrame({'from': [1, 2], 'to': [2, 3], 'capacity': [4.0, 2.0]})
        ingestion = DataIngestion(df)

        self.assertEqual(ingestion.capacity_matrix, [[0, 4, 0], [0, 0, 2], [0, 0, 0]])

    def test_invalid_edge_lists(self):
        cases = {
            'missing column': pd.DataFrame({'from': ['s'], 'to': ['t']}),
            'negative capacity': pd.DataFrame({'from': ['s'], 'to': ['t'], 'capacity': [-1]}),
            'fractional capacity': pd.DataFrame({'from': ['s'], 'to': ['t'], 'capacity': [1.5]}),
            'missing capacity': pd.DataFrame({'from': ['s'], 'to': ['t'], 'capacity': [np.nan]}),
            'text capacity': pd.DataFrame({'from': ['s'], 'to': ['t'], 'capacity': ['lots']}),
            'bool capacity': pd.DataFrame({'from': ['s'], 'to': ['t'], 'capacity': [True]}),
        }
        for name, df in cases.items():
            with self.subTest(name):
                with self.assertRaises(InvalidNetworkError):
                    DataIngestion(df)

    def test_from_numpy_matrix(self):
        matrix = np.array([[0, 2, 0], [0, 0, 0], [0, 0, 0]])
        ingestion = DataIngestion.from_matrix(matrix)

        self.assertEqual(ingestion.node_to_id, {0: 0, 1: 1, 2: 2})
        self.assertEqual(ingestion.capacity_matrix, [[0, 2, 0], [0, 0, 0], [0, 0, 0]])

    def test_from_dataframe_matrix(self):
        df = pd.DataFrame([[0, 5], [1, 0]], columns=['left', 'right'])
        ingestion = DataIngestion.from_matrix(df)

        self.assertEqual(ingestion.node_to_id, {'left': 0, 'right': 1})
        self.assertEqual(ingestion.capacity_matrix, [[0, 5], [1, 0]])

    def test_from_matrix_invalid(self):
        cases = {
            'not square': [[0, 1, 0], [0, 0, 0]],
            'empty': [],
            'ragged': [[0, 1], [0]],
            'negative': [[0, -2], [0, 0]],
        }
        for name, matrix in cases.items():
            with self.subTest(name):
                with self.assertRaises(InvalidNetworkError):
                    DataIngestion.from_matrix(matrix)

    @patch('pandas.read_csv')
    def test_load_edge_list(self, mock_csv):
        mock_csv.return_value = sample_edges()
        ingestion = load_edge_list('edges.csv')

        mock_csv.assert_called_once_with('edges.csv')
        self.assertEqual(len(ingestion.node_to_id), 5)

    @patch('pandas.read_csv')
    def test_load_capacity_matrix_with_header(self, mock_csv):
        mock_csv.return_value = pd.DataFrame([[0, 5], [0, 0]], columns=['u', 'v'])
        ingestion = load_capacity_matrix('matrix.csv', header=True)

        mock_csv.assert_called_once_with('matrix.csv', header=0)
        self.assertEqual(ingestion.node_to_id, {'u': 0, 'v': 1})
        self.assertEqual(ingestion.capacity_matrix, [[0, 5], [0, 0]])

class TestGraphManager(unittest.TestCase):
    """
    End-to-end flow analysis over labelled input.

    Verifies:
    1. DataFrame, CSV path and DataIngestion sources are accepted
    2. Results come back keyed by node labels
    3. Unknown labels and bad sources raise ValueError
    """

    def setUp(self):
        self.manager = GraphManager(sample_edges())

    def test_analyze_flow(self):
        flow_value, paths, edge_flows, metrics = self.manager.analyze_flow('s', 't', verify=True)

        self.assertEqual(flow_value, 5)
        self.assertEqual(paths, [(['s', 'a', 't'], 3), (['s', 'b', 't'], 2)])
        self.assertEqual(edge_flows, {('s', 'a'): 3, ('s', 'b'): 2, ('a', 't'): 3, ('b', 't'): 2})
        self.assertEqual(metrics['total_flow'], 5)

    def test_repeated_analysis_uses_fresh_network(self):
        first, _, _, _ = self.manager.analyze_flow('s', 't')
        second, _, _, _ = self.manager.analyze_flow('s', 't')

        self.assertEqual(first, second)

    def test_isolated_sink(self):
        flow_value, paths, _, _ = self.manager.analyze_flow('s', 'x')

        self.assertEqual(flow_value, 0)
        self.assertEqual(paths, [])

    def test_unknown_node(self):
        with self.assertRaises(ValueError):
            self.manager.analyze_flow('s', 'nowhere')

    def test_csv_source(self):
        with patch('pandas.read_csv', Mock(return_value=sample_edges())):
            manager = GraphManager('edges.csv')

        flow_value, _, _, _ = manager.analyze_flow('s', 't')
        self.assertEqual(flow_value, 5)

    def test_unreadable_csv(self):
        with patch('pandas.read_csv', Mock(side_effect=FileNotFoundError('edges.csv'))):
            with self.assertRaises(ValueError):
                GraphManager('edges.csv')

    def test_invalid_source(self):
        with self.assertRaises(ValueError):
            GraphManager(42)

    def test_ingestion_source(self):
        ingestion = DataIngestion(sample_edges())

        self.assertIs(GraphManager(ingestion).data_ingestion, ingestion)

    def test_node_info(self):
        info = self.manager.get_node_info()

        self.assertIn('Total nodes: 5', info)
        self.assertIn('Total edges: 5', info)

if __name__ == '__main__':
    unittest.main()
