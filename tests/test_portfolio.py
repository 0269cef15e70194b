"""Public résumé views: /api/profile and /api/cv."""

from utils.cv import group_achievements


def seed_cv(client, headers):
    client.post('/api/profiles', headers=headers, json={
        'full_name': 'Jane Doe', 'title': 'Software Engineer'
    })
    client.post('/api/experiences', headers=headers, json={
        'company_name': 'Acme Corp',
        'position': 'Backend Engineer',
        'start_date': '2021-03-01',
        'achievements': [
            {'achievement': 'Cut API latency by 40%', 'category': 'Performance'},
            {'achievement': 'Ran on-call rotation'},
            {'achievement': 'Mentored two juniors', 'category': 'Leadership'},
            {'achievement': 'Added query caching', 'category': 'Performance'},
        ],
    })
    client.post('/api/education', headers=headers, json={
        'institution': 'State University', 'degree': 'BSc', 'start_year': 2012
    })
    client.post('/api/skills', headers=headers, json={'category': 'Languages', 'skills': ['Python']})
    client.post('/api/certifications', headers=headers, json={
        'name': 'Cloud Practitioner', 'issuer': 'Cloud Inc', 'issue_date': '2023-02-10'
    })


def test_group_achievements_keeps_first_seen_order():
    items = [
        {'achievement': 'a', 'category': 'Impact'},
        {'achievement': 'b', 'category': None},
        {'achievement': 'c', 'category': 'Leadership'},
        {'achievement': 'd', 'category': 'Impact'},
        {'achievement': 'e', 'category': '  '},
    ]

    groups = group_achievements(items)

    assert [g['category'] for g in groups] == ['Impact', 'Leadership', None]
    assert [i['achievement'] for i in groups[0]['items']] == ['a', 'd']
    assert [i['achievement'] for i in groups[2]['items']] == ['b', 'e']


def test_group_achievements_empty():
    assert group_achievements([]) == []


def test_owner_profile_missing_is_404(client):
    resp = client.get('/api/profile')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'Profile 1 has not been created yet'}


def test_owner_profile(client, auth_headers):
    seed_cv(client, auth_headers)

    resp = client.get('/api/profile')
    assert resp.status_code == 200
    assert resp.get_json()['full_name'] == 'Jane Doe'


def test_cv_without_content(client):
    resp = client.get('/api/cv')

    assert resp.status_code == 200
    assert resp.get_json() == {
        'profile': None,
        'experiences': [],
        'education': [],
        'skills': [],
        'certifications': [],
    }


def test_cv_document(client, auth_headers):
    seed_cv(client, auth_headers)

    cv = client.get('/api/cv').get_json()

    assert list(cv) == ['profile', 'experiences', 'education', 'skills', 'certifications']
    assert cv['profile']['title'] == 'Software Engineer'
    assert len(cv['education']) == 1
    assert cv['skills'][0]['skills'] == ['Python']
    assert cv['certifications'][0]['issuer'] == 'Cloud Inc'

    experience = cv['experiences'][0]
    assert len(experience['achievements']) == 4
    groups = experience['achievementsByCategory']
    assert [g['category'] for g in groups] == ['Performance', 'Leadership', None]
    assert [i['achievement'] for i in groups[0]['items']] == [
        'Cut API latency by 40%', 'Added query caching'
    ]


def test_cv_only_shows_configured_profile(client, auth_headers):
    seed_cv(client, auth_headers)
    client.post('/api/profiles', headers=auth_headers, json={'full_name': 'Someone Else'})
    client.post('/api/skills', headers=auth_headers, json={'category': 'Hidden', 'profile_id': 2})

    cv = client.get('/api/cv').get_json()
    assert [s['category'] for s in cv['skills']] == ['Languages']
    assert len(client.get('/api/skills').get_json()) == 2
