from conftest import login_user


def test_login_page_loads(client):
    response = client.get('/auth/login')
    assert response.status_code == 200
    assert 'Iniciar sesión' in response.get_data(as_text=True)


def test_pages_require_login(client):
    response = client.get('/products/')
    assert response.status_code == 302
    assert '/auth/login' in response.headers['Location']


def test_login_with_wrong_password(client, admin_user):
    response = login_user(client, 'admin@gftire.com', 'incorrecta')
    assert 'Correo o contraseña incorrectos' in response.get_data(as_text=True)


def test_login_is_case_insensitive_on_email(client, admin_user):
    response = login_user(client, 'ADMIN@gftire.com')
    assert response.status_code == 200
    assert 'Panel de control' in response.get_data(as_text=True)


def test_login_ignores_external_next(client, admin_user):
    response = client.post('/auth/login?next=http://evil.example.com/', data={
        'email': 'admin@gftire.com',
        'password': 'secret123',
    })
    assert response.headers['Location'] == '/'


def test_logout(admin_client):
    response = admin_client.get('/auth/logout', follow_redirects=True)
    assert 'Sesión cerrada correctamente' in response.get_data(as_text=True)
    assert admin_client.get('/').status_code == 302


def test_regular_user_cannot_open_admin_pages(user_client):
    for path in ('/employees/', '/users/', '/reports/'):
        response = user_client.get(path)
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/unauthorized')


def test_navigation_hides_admin_entries(user_client):
    html = user_client.get('/').get_data(as_text=True)
    assert 'Productos' in html
    assert 'Empleados' not in html
    assert 'Reportes' not in html


def test_dashboard_for_admin(admin_client):
    response = admin_client.get('/?range=7days')
    html = response.get_data(as_text=True)
    assert response.status_code == 200
    assert 'Empleados' in html
    assert 'Sin alertas de stock' in html


def test_dashboard_unknown_range_falls_back(admin_client):
    assert admin_client.get('/?range=1year').status_code == 200


def test_sales_trend_api(admin_client):
    response = admin_client.get('/api/sales_trend?range=all')
    assert response.status_code == 200
    assert response.get_json()['total_sales'] == 0

    response = admin_client.get('/api/sales_trend?range=1year')
    assert response.status_code == 400
    assert response.get_json()['code'] == 'INVALID_RANGE'
