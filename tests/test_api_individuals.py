"""
Tests for the individuals API blueprint
"""

import pytest

from roots_app.services.country_service import CountryService


@pytest.fixture
def individual_id(client):
    response = client.post('/api/individuals', json={
        'date_of_birth': '1880-02-11',
        'country_of_birth': 'Prussia',
        'name': {'first_name': 'Friedrich', 'last_name': 'Weber'},
    })
    assert response.status_code == 201
    return response.get_json()['individual']['id']


class TestIndividualsAPI:
    """Test individual endpoints"""

    def test_create_individual(self, client):
        response = client.post('/api/individuals', json={
            'gender': 'female',
            'name': {'first_name': 'Jantje', 'last_name': 'Kok'},
        })

        assert response.status_code == 201
        data = response.get_json()
        assert data['success'] is True
        assert data['individual']['display_name'] == 'Jantje Kok'
        assert data['individual']['current_name']['is_current'] is True
        assert data['individual']['is_living'] is True

    def test_create_requires_json_body(self, client):
        response = client.post('/api/individuals', data='not json', content_type='text/plain')

        assert response.status_code == 400
        assert response.get_json() == {
            'success': False, 'error': 'No data provided', 'details': {'type': 'ValidationError'},
        }

    def test_create_death_before_birth(self, client):
        response = client.post('/api/individuals', json={
            'date_of_birth': '1900-01-01', 'date_of_death': '1890-01-01',
        })

        assert response.status_code == 400
        assert response.get_json()['details']['type'] == 'InvalidIntervalError'

    def test_create_with_non_boolean_private(self, client):
        response = client.post('/api/individuals', json={'private': 'yes'})

        assert response.status_code == 400
        assert response.get_json()['details']['type'] == 'ValidationError'

    def test_create_with_overlong_name(self, client):
        response = client.post('/api/individuals', json={
            'name': {'first_name': 'J' * 257, 'last_name': 'Kok'},
        })

        assert response.status_code == 400
        assert 'first_name must be at most 256 characters' in response.get_json()['error']

    def test_get_individual_with_owned_records(self, client, individual_id):
        client.post(f'/api/individuals/{individual_id}/images', json={'url': 'https://example.org/fw.jpg'})
        client.post(f'/api/individuals/{individual_id}/occupations', json={'occupation': 'Baker'})

        response = client.get(f'/api/individuals/{individual_id}')

        assert response.status_code == 200
        individual = response.get_json()['individual']
        assert [name['full_name'] for name in individual['names']] == ['Friedrich Weber']
        assert [image['url'] for image in individual['images']] == ['https://example.org/fw.jpg']
        assert [o['occupation'] for o in individual['occupations']] == ['Baker']

    def test_get_individual_modern_country(self, client, individual_id, db):
        CountryService().load_default_countries()

        individual = client.get(f'/api/individuals/{individual_id}').get_json()['individual']

        assert individual['country_of_birth'] == 'Prussia'
        assert individual['modern_country_of_birth'] == 'Germany'

    def test_get_unknown_individual(self, client, db):
        response = client.get('/api/individuals/999')
        assert response.status_code == 404
        assert response.get_json()['details']['type'] == 'NotFoundError'

    def test_update_individual(self, client, individual_id):
        response = client.put(f'/api/individuals/{individual_id}', json={
            'date_of_death': '1944-10-02', 'country_of_death': 'Netherlands',
        })

        assert response.status_code == 200
        individual = response.get_json()['individual']
        assert individual['date_of_death'] == '1944-10-02'
        assert individual['is_living'] is False

    def test_update_unknown_field(self, client, individual_id):
        response = client.put(f'/api/individuals/{individual_id}', json={'eye_colour': 'blue'})
        assert response.status_code == 400
        assert 'Unknown fields: eye_colour' in response.get_json()['error']


class TestPrivateIndividuals:
    """Private individuals are redacted unless include_private is set"""

    @pytest.fixture
    def private_id(self, client):
        response = client.post('/api/individuals', json={
            'private': True, 'bio': 'Living relative',
            'name': {'first_name': 'Private', 'last_name': 'Person'},
        })
        return response.get_json()['individual']['id']

    def test_list_redacts_private(self, client, individual_id, private_id):
        individuals = client.get('/api/individuals').get_json()['individuals']

        assert individuals[0]['id'] == individual_id
        assert individuals[0]['display_name'] == 'Friedrich Weber'
        assert individuals[1] == {'id': private_id, 'private': True}

    def test_list_with_include_private(self, client, private_id):
        individuals = client.get('/api/individuals?include_private=true').get_json()['individuals']

        assert individuals[0]['bio'] == 'Living relative'
        assert individuals[0]['private'] is True

    def test_get_redacts_private(self, client, private_id):
        individual = client.get(f'/api/individuals/{private_id}').get_json()['individual']

        assert individual == {'id': private_id, 'private': True}


class TestNamesAPI:
    """Test name endpoints"""

    def test_second_current_name_conflicts(self, client, individual_id):
        response = client.post(f'/api/individuals/{individual_id}/names', json={
            'first_name': 'Fritz', 'last_name': 'Weber',
        })

        assert response.status_code == 409
        assert response.get_json()['details']['type'] == 'DuplicateCurrentNameError'

    def test_add_historical_name(self, client, individual_id):
        response = client.post(f'/api/individuals/{individual_id}/names', json={
            'first_name': 'Fritz', 'last_name': 'Weber', 'date_from': '1880-02-11', 'date_to': '1890-01-01',
        })

        assert response.status_code == 201
        names = client.get(f'/api/individuals/{individual_id}/names').get_json()['names']
        assert len(names) == 2

    def test_change_name(self, client, individual_id):
        response = client.post(f'/api/individuals/{individual_id}/names/change', json={
            'first_name': 'Frederick', 'last_name': 'Weaver',
            'reason_for_change': 'emigration', 'effective_date': '1905-04-01',
        })

        assert response.status_code == 201
        assert response.get_json()['name']['date_from'] == '1905-04-01'
        current = client.get(f'/api/individuals/{individual_id}').get_json()['individual']['current_name']
        assert current['full_name'] == 'Frederick Weaver'

    def test_update_name(self, client, individual_id):
        names = client.get(f'/api/individuals/{individual_id}/names').get_json()['names']

        response = client.put(f"/api/names/{names[0]['id']}", json={'middle_name': 'Wilhelm'})

        assert response.status_code == 200
        assert response.get_json()['name']['full_name'] == 'Friedrich Wilhelm Weber'

    def test_names_of_unknown_individual(self, client, db):
        assert client.get('/api/individuals/999/names').status_code == 404

    def test_add_name_to_unknown_individual(self, client, db):
        response = client.post('/api/individuals/999/names', json={'first_name': 'A', 'last_name': 'B'})
        assert response.status_code == 400
        assert response.get_json()['details']['type'] == 'MissingReferenceError'


class TestImagesAndOccupationsAPI:
    def test_image_lifecycle(self, client, individual_id):
        created = client.post(f'/api/individuals/{individual_id}/images', json={'url': 'https://example.org/a.jpg'})
        image_id = created.get_json()['image']['id']

        updated = client.put(f'/api/images/{image_id}', json={'url': 'https://example.org/b.jpg'})

        assert updated.status_code == 200
        images = client.get(f'/api/individuals/{individual_id}/images').get_json()['images']
        assert [image['url'] for image in images] == ['https://example.org/b.jpg']

    def test_occupation_lifecycle(self, client, individual_id):
        created = client.post(f'/api/individuals/{individual_id}/occupations', json={
            'occupation': 'Clerk', 'occupation_start': '1900-01-01', 'employer': 'Gemeente Utrecht',
        })
        occupation_id = created.get_json()['occupation']['id']

        bad = client.put(f'/api/occupations/{occupation_id}', json={'occupation_end': '1899-01-01'})
        good = client.put(f'/api/occupations/{occupation_id}', json={'occupation_end': '1920-01-01'})

        assert bad.status_code == 400
        assert good.status_code == 200
        occupations = client.get(f'/api/individuals/{individual_id}/occupations').get_json()['occupations']
        assert occupations[0]['occupation_end'] == '1920-01-01'

    def test_update_unknown_image(self, client, db):
        assert client.put('/api/images/999', json={'url': 'x'}).status_code == 404
