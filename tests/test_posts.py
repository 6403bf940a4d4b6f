from pathlib import Path

from app.core.config import settings
from app.db import Post

from conftest import auth_header, create_post, create_user, TEACHER_ROLE_ID

IMAGE = ('foto.png', b'fake image data', 'image/png')


def _create_via_api(client, teacher, **fields):
    data = {'titulo': 'Post criativo', 'descricao': 'Primeiro post da turma', 'visibilidade': 'true'}
    data.update(fields)
    return client.post('/api/posts', data=data, files={'imagem': IMAGE}, headers=auth_header(teacher))


def test_create_post_stores_image_and_uses_token_author(client, teacher) -> None:
    response = _create_via_api(client, teacher)

    assert response.status_code == 201
    body = response.json()
    assert body['autorID'] == teacher.id
    assert body['titulo'] == 'Post criativo'
    assert body['visibilidade'] is True
    assert body['caminhoImagem'].endswith('.png')
    assert (Path(settings.UPLOAD_DIR) / body['caminhoImagem']).read_bytes() == b'fake image data'


def test_create_post_without_image_returns_400(client, teacher, db_session) -> None:
    response = client.post(
        '/api/posts',
        data={'titulo': 'Sem imagem', 'descricao': 'teste', 'visibilidade': 'true'},
        headers=auth_header(teacher),
    )

    assert response.status_code == 400
    assert response.json() == {'detail': 'Изображение обязательно'}
    assert db_session.query(Post).count() == 0


def test_create_post_with_non_true_visibility_is_hidden(client, teacher) -> None:
    response = _create_via_api(client, teacher, visibilidade='yes')

    assert response.status_code == 201
    assert response.json()['visibilidade'] is False


def test_created_post_round_trips_through_get_by_id(client, teacher) -> None:
    created = _create_via_api(client, teacher).json()

    response = client.get(f"/api/posts/{created['id']}", headers=auth_header(teacher))

    assert response.status_code == 200
    fetched = response.json()
    for field in ('titulo', 'descricao', 'visibilidade', 'autorID', 'caminhoImagem'):
        assert fetched[field] == created[field]


def test_get_missing_post_returns_404(client, teacher) -> None:
    response = client.get('/api/posts/999', headers=auth_header(teacher))

    assert response.status_code == 404
    assert response.json() == {'detail': 'Пост не найден'}


def test_list_all_posts_includes_hidden_ones(client, db_session, teacher) -> None:
    create_post(db_session, author=teacher, visible=True)
    create_post(db_session, author=teacher, visible=False)

    response = client.get('/api/posts', headers=auth_header(teacher))

    assert response.status_code == 200
    assert len(response.json()) == 2


def test_update_post_changes_only_sent_fields(client, db_session, teacher) -> None:
    post = create_post(db_session, author=teacher, title='teste', description='teste')

    response = client.put(
        f'/api/posts/{post.id}',
        data={'descricao': 'descrição da postagem atualizada', 'visibilidade': 'false'},
        headers=auth_header(teacher),
    )

    assert response.status_code == 200
    body = response.json()
    assert body['descricao'] == 'descrição da postagem atualizada'
    assert body['titulo'] == 'teste'
    assert body['visibilidade'] is False
    assert body['caminhoImagem'] == 'fake-path.jpg'


def test_update_post_replaces_image_when_uploaded(client, db_session, teacher) -> None:
    post = create_post(db_session, author=teacher)

    response = client.put(f'/api/posts/{post.id}', files={'imagem': IMAGE}, headers=auth_header(teacher))

    assert response.status_code == 200
    assert response.json()['caminhoImagem'] != 'fake-path.jpg'
    assert response.json()['caminhoImagem'].endswith('.png')


def test_update_missing_post_returns_404(client, teacher) -> None:
    response = client.put('/api/posts/999', data={'titulo': 'x'}, headers=auth_header(teacher))

    assert response.status_code == 404


def test_delete_post(client, db_session, teacher) -> None:
    post = create_post(db_session, author=teacher)

    response = client.delete(f'/api/posts/{post.id}', headers=auth_header(teacher))

    assert response.status_code == 204
    assert client.get(f'/api/posts/{post.id}', headers=auth_header(teacher)).status_code == 404


def test_delete_missing_post_returns_404(client, teacher) -> None:
    response = client.delete('/api/posts/999', headers=auth_header(teacher))

    assert response.status_code == 404
    assert response.json() == {'detail': 'Пост не найден'}


def test_feed_without_visible_posts_is_empty(client, db_session, teacher, student) -> None:
    create_post(db_session, author=teacher, visible=False)

    response = client.get('/api/posts/feed', headers=auth_header(student))

    assert response.status_code == 200
    assert response.json() == {
        'data': [],
        'pagination': {'total': 0, 'page': 1, 'limit': 6, 'pages': 0},
    }


def test_feed_pages_are_newest_first(client, student, dated_posts) -> None:
    first = client.get('/api/posts/feed', params={'page': 1, 'limit': 3}, headers=auth_header(student)).json()
    second = client.get('/api/posts/feed', params={'page': 2, 'limit': 3}, headers=auth_header(student)).json()

    assert [p['titulo'] for p in first['data']] == ['post 7', 'post 6', 'post 5']
    assert [p['titulo'] for p in second['data']] == ['post 4', 'post 3', 'post 2']
    assert first['pagination'] == {'total': 8, 'page': 1, 'limit': 3, 'pages': 3}


def test_feed_invalid_paging_falls_back_to_defaults(client, student, dated_posts) -> None:
    response = client.get('/api/posts/feed', params={'page': 'abc', 'limit': '0'}, headers=auth_header(student))

    assert response.status_code == 200
    assert response.json()['pagination'] == {'total': 8, 'page': 1, 'limit': 6, 'pages': 2}
    assert len(response.json()['data']) == 6


def test_feed_with_huge_page_is_empty_not_an_error(client, student, dated_posts) -> None:
    response = client.get('/api/posts/feed', params={'page': '99999999999999999999'}, headers=auth_header(student))

    assert response.status_code == 200
    assert response.json()['data'] == []
    assert response.json()['pagination']['total'] == 8
    assert response.json()['pagination']['page'] == 99999999999999999999


def test_my_posts_with_huge_page_and_limit_is_capped(client, teacher, dated_posts) -> None:
    response = client.get(
        '/api/posts/me',
        params={'page': '99999999999999999999', 'limit': '99999999999999999999'},
        headers=auth_header(teacher),
    )

    assert response.status_code == 200
    assert response.json()['data'] == []
    assert response.json()['pagination']['limit'] == 100


def test_feed_filters_by_search_term(client, db_session, teacher, student) -> None:
    create_post(db_session, author=teacher, title='Feira de Ciências', description='stands')
    create_post(db_session, author=teacher, title='Aviso', description='a FEIRA começa amanhã')
    create_post(db_session, author=teacher, title='Feira escondida', visible=False)
    create_post(db_session, author=teacher, title='Outro assunto')

    response = client.get('/api/posts/feed', params={'q': 'feira'}, headers=auth_header(student))

    assert response.status_code == 200
    assert {p['titulo'] for p in response.json()['data']} == {'Feira de Ciências', 'Aviso'}
    assert response.json()['pagination']['total'] == 2


def test_my_posts_lists_only_own_posts(client, db_session, teacher) -> None:
    other = create_user(db_session, email='outro@escola.com.br', role_id=TEACHER_ROLE_ID)
    mine = create_post(db_session, author=teacher, visible=False)
    create_post(db_session, author=other)

    response = client.get('/api/posts/me', headers=auth_header(teacher))

    assert response.status_code == 200
    assert [p['id'] for p in response.json()['data']] == [mine.id]
    assert response.json()['pagination'] == {'total': 1, 'page': 1, 'limit': 10, 'pages': 1}


def test_my_posts_is_teacher_only(client, student) -> None:
    assert client.get('/api/posts/me', headers=auth_header(student)).status_code == 403


def test_search_requires_term(client, student) -> None:
    response = client.get('/api/posts/search', headers=auth_header(student))

    assert response.status_code == 400
    assert response.json() == {'detail': 'Не указан поисковый запрос'}


def test_search_is_case_insensitive_on_title_or_description(client, db_session, teacher, student) -> None:
    by_title = create_post(db_session, author=teacher, title='Titulo Criativo', description='teste')
    by_description = create_post(db_session, author=teacher, title='outro', description='um título CRIATIVO aqui')
    create_post(db_session, author=teacher, title='nada', description='nada')

    response = client.get('/api/posts/search', params={'q': 'criativo'}, headers=auth_header(student))

    assert response.status_code == 200
    assert {p['id'] for p in response.json()} == {by_title.id, by_description.id}
