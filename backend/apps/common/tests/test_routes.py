from rest_framework import status
from rest_framework.test import APITestCase


class TestRoutes(APITestCase):
    def test_root_lists_endpoints(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['message'], 'Welcome to CRUD API')

    def test_api_health(self):
        response = self.client.get('/api/health')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()['success'])

    def test_readiness_against_test_database(self):
        response = self.client.get('/health/ready')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['checks']['database']['status'], 'ok')

    def test_unknown_route_is_json(self):
        for path in ('/api/unknown', '/nowhere/at/all'):
            response = self.client.get(path)
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            self.assertEqual(response.json(), {'success': False, 'message': 'Route not found'})

    def test_malformed_json_body(self):
        response = self.client.post('/api/users', data='{"name": ', content_type='application/json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['message'], 'Malformed request')

    def test_unsupported_method(self):
        response = self.client.put('/api/users', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertFalse(response.json()['success'])
