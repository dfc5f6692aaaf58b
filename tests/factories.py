"""
Factory Boy factories for ATS API payloads.

The portal keeps no models, so every factory builds the JSON dict the API
would send.
"""
import factory


API_BASE_URL = 'http://ats.test/api'


class UserPayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f'user-{n}')
    name = factory.Sequence(lambda n: f'User {n}')
    email = factory.LazyAttribute(lambda o: f'{o.id}@whlc.test')
    role = 'admin'
    eventAccess = True
    offerAccess = False


class OfficePayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f'office-{n}')
    name = factory.Sequence(lambda n: f'Studio {n}')
    city = 'New Orleans'
    state = 'LA'


class JobPayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f'job-{n}')
    title = factory.Sequence(lambda n: f'Project Architect {n}')
    slug = factory.LazyAttribute(lambda o: o.id)
    department = 'Architecture'
    location = 'Baton Rouge, LA'
    type = 'full-time'
    status = 'open'
    salary = None
    description = 'Design civic buildings.'
    requirements = '- Licensed architect\n- 5 years experience'
    publishToWebsite = True
    createdAt = '2026-01-05T10:00:00.000Z'


class ApplicantPayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f'applicant-{n}')
    firstName = factory.Sequence(lambda n: f'First{n}')
    lastName = 'Applicant'
    email = factory.LazyAttribute(lambda o: f'{o.firstName.lower()}@example.com')
    phone = '(225) 555-0100'
    stage = 'new'
    source = 'LinkedIn'
    job = None
    reviews = factory.LazyFunction(list)
    notes = factory.LazyFunction(list)
    createdAt = '2026-01-05T10:00:00.000Z'


class InterviewPayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f'interview-{n}')
    scheduledAt = '2026-02-01T15:00:00.000Z'
    type = 'in_person'
    status = 'scheduled'
    outcome = None
    notesUrl = None
    location = 'Baton Rouge office'
    applicant = factory.LazyFunction(ApplicantPayloadFactory)
    participants = factory.LazyFunction(list)


class EventPayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f'event-{n}')
    name = factory.Sequence(lambda n: f'Career Fair {n}')
    type = 'job_fair'
    date = '2026-03-10T00:00:00.000Z'
    location = 'LSU Student Union'
    university = 'LSU'
    published = True


def participant(user, feedback=None, rating=None, pk=None):
    """An interview participant entry for ``user``."""
    return {
        'id': pk or f"participant-{user['id']}",
        'userId': user['id'],
        'user': {'id': user['id'], 'name': user['name'], 'email': user['email']},
        'feedback': feedback,
        'rating': rating,
    }
