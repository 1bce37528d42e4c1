"""
Tests for sample data creation
"""
from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError

from gameshelf.models import Game, Genre, Platform, User
from gameshelf.seed import create_sample_data


class TestSampleData:
    """Tests for create_sample_data"""

    def test_creates_catalog(self, app):
        with app.app_context():
            assert create_sample_data() is True

            assert User.query.count() == 1
            assert Genre.query.count() == 10
            assert Platform.query.count() == 8
            assert Game.query.count() == 3

            zelda = Game.query.filter_by(name='The Legend of Zelda: Breath of the Wild').one()
            assert zelda.genre.name == 'Adventure'
            assert zelda.platform.name == 'Nintendo Switch'

    def test_admin_can_log_in(self, app, client, login):
        with app.app_context():
            create_sample_data()

        response = login(client, username='admin', password='admin123')

        assert response.status_code == 200
        assert response.get_json()['user']['email'] == 'admin@games.com'

    def test_second_run_skips(self, app):
        with app.app_context():
            create_sample_data()
            assert create_sample_data() is False
            assert Genre.query.count() == 10

    def test_failure_does_not_raise(self, app):
        with app.app_context():
            with patch('gameshelf.seed.UserRepository.count', side_effect=SQLAlchemyError('no such table')):
                assert create_sample_data() is False

            assert Genre.query.count() == 0
