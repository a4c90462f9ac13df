from django.db import connections, DatabaseError
from django.http import JsonResponse


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as e:
        return JsonResponse({'message': 'Database unavailable', 'error': str(e)}, status=500)
    return JsonResponse({'message': 'ok', 'db': bool(row and row[0] == 1)})
