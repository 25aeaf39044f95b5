"""
PostCard 및 Post 모델 단위 테스트

테스트 대상:
- Post.was_edited: createdAt == updatedAt 이면 수정되지 않은 것으로 간주
- PostCard 레이블 (Created/Updated)
- edit(): 전체 레코드 위임, 삭제 확인 문구와 삭제 경로
"""
from unittest.mock import MagicMock

from post_frontend.card import PostCard, format_date
from post_frontend.models.schemas import Post


class TestPostModel:
    """Post 모델 테스트"""

    def test_camel_case_aliases(self, sample_posts):
        """camelCase 응답 필드 매핑"""
        post = Post.model_validate(sample_posts[0])
        assert post.image_url == 'https://example.com/alpha.png'
        assert post.created_at == '2024-03-01T10:00:00Z'

    def test_missing_image_url_is_none(self, sample_post):
        """imageUrl 누락 시 None"""
        data = dict(sample_post)
        del data['imageUrl']
        assert Post.model_validate(data).image_url is None

    def test_was_edited(self, sample_posts):
        post, edited = (Post.model_validate(p) for p in sample_posts)
        assert not post.was_edited
        assert edited.was_edited


class TestLabels:
    """날짜 레이블 테스트"""

    def test_never_edited_hides_updated_label(self, sample_post):
        """createdAt == updatedAt 이면 Updated 레이블 생략"""
        card = PostCard(Post.model_validate(sample_post))
        assert card.created_label == 'Created: 03/01/2024'
        assert card.show_updated is False

    def test_edited_shows_both_labels(self, sample_posts):
        """수정된 게시물은 두 레이블 모두 표시 (7자리 소수초 허용)"""
        card = PostCard(Post.model_validate(sample_posts[1]))
        assert card.show_updated is True
        assert card.created_label == 'Created: 03/02/2024'
        assert card.updated_label == 'Updated: 03/05/2024'

    def test_unparseable_timestamp_rendered_verbatim(self):
        assert format_date('yesterday') == 'yesterday'

    def test_display_fields(self, sample_posts):
        card = PostCard(Post.model_validate(sample_posts[0]))
        assert card.name == 'Alpha'
        assert card.description == 'Alpha description'
        assert card.image_url == 'https://example.com/alpha.png'


class TestActions:
    """edit / delete 동작 테스트"""

    def test_edit_passes_full_record(self, sample_post):
        """수정 시 전체 레코드 전달"""
        post = Post.model_validate(sample_post)
        on_edit = MagicMock()

        PostCard(post, on_edit=on_edit).edit()

        on_edit.assert_called_once_with(post)

    def test_delete_posts_id_only(self, sample_post):
        """삭제 확인 문구는 이름을, 삭제 요청은 id만 사용"""
        card = PostCard(Post.model_validate(sample_post))

        assert card.delete_confirmation == 'Are you sure you want to delete "A"?'
        assert card.delete_action == '/posts/1/delete'
