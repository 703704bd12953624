"""
Integration tests for the branch / program / year / semester / subject catalog
"""
from httpx import AsyncClient

MISSING_ID = '00000000-0000-0000-0000-000000000000'


class TestCatalogBrowse:

    async def test_branches_sorted_by_code(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/catalog/branches')

        assert response.status_code == 200
        assert [b['code'] for b in response.json()] == ['CSE', 'ECE']

    async def test_programs_for_branch(self, client: AsyncClient, catalog):
        response = await client.get(f'/api/v1/catalog/branches/{catalog.cse.id}/programs')

        assert response.status_code == 200
        assert [p['code'] for p in response.json()] == ['BTECH']

    async def test_drill_down_to_subjects(self, client: AsyncClient, catalog):
        years = await client.get(f'/api/v1/catalog/programs/{catalog.btech.id}/years')
        semesters = await client.get(f'/api/v1/catalog/years/{catalog.first_year.id}/semesters')
        subjects = await client.get(f'/api/v1/catalog/semesters/{catalog.sem1.id}/subjects')

        assert [y['year'] for y in years.json()] == [1]
        assert [s['number'] for s in semesters.json()] == [1, 2]
        assert sorted(s['code'] for s in subjects.json()) == ['CS101', 'ECE101']

    async def test_unknown_parents_return_404(self, client: AsyncClient, catalog):
        for path in (
            f'/api/v1/catalog/programs/{MISSING_ID}/years',
            f'/api/v1/catalog/years/{MISSING_ID}/semesters',
            f'/api/v1/catalog/semesters/{MISSING_ID}/subjects',
        ):
            response = await client.get(path)
            assert response.status_code == 404, path

    async def test_structure_is_nested(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/catalog/structure')

        assert response.status_code == 200
        branches = {b['code']: b for b in response.json()['branches']}
        assert set(branches) == {'CSE', 'ECE'}
        assert branches['ECE']['programs'] == []

        program = branches['CSE']['programs'][0]
        assert program['code'] == 'BTECH'
        assert program['years'][0]['year'] == 1
        assert [s['number'] for s in program['years'][0]['semesters']] == [1, 2]


class TestSubjects:

    async def test_list_filters_by_branch(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/subjects', params={'branch': 'ece'})

        assert response.status_code == 200
        data = response.json()
        assert [s['code'] for s in data['subjects']] == ['ECE101']
        assert data['pagination']['total'] == 1

    async def test_list_filters_by_semester(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/subjects', params={'semester': 2})

        assert [s['code'] for s in response.json()['subjects']] == ['CS102']

    async def test_subject_lookup_is_case_insensitive(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/subjects/cs101')

        assert response.status_code == 200
        data = response.json()
        assert data['code'] == 'CS101'
        assert data['branch']['code'] == 'CSE'
        assert data['topics'] == ['Basics', 'Loops', 'Functions']

    async def test_unknown_subject_code(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/subjects/XX999')

        assert response.status_code == 404
        assert response.json()['success'] is False

    async def test_subject_resources_only_approved(self, client: AsyncClient, catalog, make_resource):
        shown = await make_resource(catalog.cs101, title='Pointers')
        await make_resource(catalog.cs101, title='Draft', is_approved=False)
        await make_resource(catalog.cs102, title='Trees')

        response = await client.get('/api/v1/subjects/CS101/resources')

        assert response.status_code == 200
        assert [r['id'] for r in response.json()['resources']] == [shown.id]

    async def test_subject_search_requires_query(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/search/subjects')

        assert response.status_code == 400

    async def test_subject_search_matches_topics(self, client: AsyncClient, catalog):
        response = await client.get('/api/v1/search/subjects', params={'q': 'transistors'})

        assert response.status_code == 200
        assert [s['code'] for s in response.json()['subjects']] == ['ECE101']
