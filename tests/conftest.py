"""
post-frontend 단위 테스트를 위한 pytest fixtures
"""
import os
import sys
import pytest

# 프로젝트 루트를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# 환경변수 설정 (import 전에 설정해야 함)
os.environ.setdefault('POST_API_URL', 'http://test-backend:5000')

TEST_API_URL = 'http://test-backend:5000'


@pytest.fixture
def base_url():
    """테스트용 백엔드 API 주소"""
    return TEST_API_URL


@pytest.fixture
def sample_post():
    """테스트용 게시물 데이터 (백엔드 JSON 형식)"""
    return {
        'id': 1,
        'name': 'A',
        'description': 'First post',
        'imageUrl': None,
        'createdAt': '2024-03-01T10:00:00Z',
        'updatedAt': '2024-03-01T10:00:00Z',
    }


@pytest.fixture
def sample_posts():
    """테스트용 다중 게시물 데이터"""
    return [
        {
            'id': 1,
            'name': 'Alpha',
            'description': 'Alpha description',
            'imageUrl': 'https://example.com/alpha.png',
            'createdAt': '2024-03-01T10:00:00Z',
            'updatedAt': '2024-03-01T10:00:00Z',
        },
        {
            'id': 2,
            'name': 'Beta',
            'description': 'Beta description',
            'imageUrl': None,
            'createdAt': '2024-03-02T09:30:00.1234567Z',
            'updatedAt': '2024-03-05T18:45:00.7654321Z',
        },
    ]
