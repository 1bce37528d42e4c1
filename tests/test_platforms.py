"""
Tests for the platforms endpoints
"""
from datetime import datetime

import pytest


class TestCreatePlatform:
    """Tests for POST /api/platforms"""

    def test_create_platform(self, auth_client):
        response = auth_client.post('/api/platforms', json={
            'name': 'PlayStation 5', 'manufacturer': 'Sony', 'releaseYear': 2020,
        })
        data = response.get_json()

        assert response.status_code == 201
        assert data['message'] == 'Platform created successfully'
        assert data['platform']['name'] == 'PlayStation 5'
        assert data['platform']['manufacturer'] == 'Sony'
        assert data['platform']['releaseYear'] == 2020

    def test_optional_fields(self, create_platform):
        platform = create_platform('Mobile')

        assert platform['manufacturer'] is None
        assert platform['releaseYear'] is None

    @pytest.mark.parametrize('offset,status', [(0, 201), (1, 400)])
    def test_release_year_upper_bound(self, auth_client, offset, status):
        year = datetime.now().year + 5 + offset

        response = auth_client.post('/api/platforms', json={'name': 'Future Console', 'releaseYear': year})

        assert response.status_code == status

    @pytest.mark.parametrize('year,status', [(1970, 201), (1969, 400)])
    def test_release_year_lower_bound(self, auth_client, year, status):
        response = auth_client.post('/api/platforms', json={'name': 'Retro Console', 'releaseYear': year})

        assert response.status_code == status

    def test_duplicate_name_ignoring_case(self, auth_client, platform):
        response = auth_client.post('/api/platforms', json={'name': 'nintendo switch'})

        assert response.status_code == 409
        assert response.get_json()['message'] == 'A platform with this name already exists'

    def test_requires_login(self, client):
        assert client.post('/api/platforms', json={'name': 'PC'}).status_code == 401


class TestPlatformDetails:
    """Tests for GET/PUT/DELETE /api/platforms/<id>"""

    def test_get_with_games(self, client, create_game, genre, platform):
        create_game(genre, platform, name='Splatoon 3')

        data = client.get(f"/api/platforms/{platform['id']}?includeGames=1").get_json()['platform']

        assert [g['name'] for g in data['games']] == ['Splatoon 3']
        assert data['games'][0]['genre']['name'] == 'Action'
        assert 'platform' not in data['games'][0]

    def test_get_missing(self, client):
        response = client.get('/api/platforms/31')

        assert response.status_code == 404
        assert response.get_json()['message'] == 'Platform with ID 31 not found'

    @pytest.mark.parametrize('method', ['get', 'put', 'delete'])
    def test_oversized_id(self, auth_client, method):
        response = getattr(auth_client, method)(f'/api/platforms/{10 ** 20}', json={'name': 'Huge'})

        assert response.status_code == 404
        assert response.get_json()['error'] == 'NOT_FOUND'

    def test_update_release_year(self, auth_client, platform):
        response = auth_client.put(f"/api/platforms/{platform['id']}", json={'releaseYear': 2018})
        data = response.get_json()['platform']

        assert response.status_code == 200
        assert data['releaseYear'] == 2018
        assert data['manufacturer'] == 'Nintendo'

    def test_update_invalid_release_year(self, auth_client, platform):
        response = auth_client.put(f"/api/platforms/{platform['id']}", json={'releaseYear': 1900})

        assert response.status_code == 400

    def test_rename_to_taken_name(self, auth_client, create_platform, platform):
        pc = create_platform('PC')

        response = auth_client.put(f"/api/platforms/{pc['id']}", json={'name': 'Nintendo Switch'})

        assert response.status_code == 409
        assert response.get_json()['message'] == 'Another platform with this name already exists'

    def test_delete_guarded_by_games(self, auth_client, create_game, genre, platform):
        create_game(genre, platform, name='One')
        create_game(genre, platform, name='Two')

        response = auth_client.delete(f"/api/platforms/{platform['id']}")

        assert response.status_code == 400
        assert response.get_json() == {
            'error': 'DEPENDENCY_ERROR',
            'message': 'Cannot delete platform. 2 game(s) are using this platform.',
            'gamesCount': 2,
        }

    def test_delete_unused_platform(self, auth_client, platform):
        response = auth_client.delete(f"/api/platforms/{platform['id']}")

        assert response.status_code == 200
        assert response.get_json()['deletedPlatform'] == {'id': platform['id'], 'name': 'Nintendo Switch'}


class TestListPlatforms:
    """Tests for GET /api/platforms"""

    @pytest.fixture
    def catalog(self, create_platform):
        create_platform('PlayStation 5', 'Sony', 2020)
        create_platform('PlayStation 4', 'Sony', 2013)
        create_platform('Xbox Series X', 'Microsoft', 2020)
        create_platform('PC', 'Various')

    def test_filter_by_manufacturer(self, client, catalog):
        data = client.get('/api/platforms?manufacturer=son').get_json()

        assert [p['name'] for p in data['platforms']] == ['PlayStation 4', 'PlayStation 5']
        assert data['filters']['manufacturer'] == 'son'

    def test_search_name_or_manufacturer(self, client, catalog):
        data = client.get('/api/platforms?search=micro').get_json()

        assert [p['name'] for p in data['platforms']] == ['Xbox Series X']

    def test_sort_by_release_year_desc_ties_by_id(self, client, catalog):
        data = client.get('/api/platforms?sortBy=releaseYear&sortOrder=DESC').get_json()
        names = [p['name'] for p in data['platforms']]

        assert names[:3] == ['PlayStation 5', 'Xbox Series X', 'PlayStation 4']

    def test_include_game_count(self, client, catalog, create_game, genre, platform):
        create_game(genre, platform)

        data = client.get('/api/platforms?includeGameCount=true&search=switch').get_json()

        assert data['platforms'][0]['gameCount'] == 1
