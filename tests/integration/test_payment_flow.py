"""
Integration Tests for Payment Flow
Registration -> payment prompt -> gateway callback -> status
"""

import json
from unittest.mock import Mock, patch

import redis
import requests


def _mock_http_response(json_data, status_code: int = 200) -> Mock:
    resp = Mock()
    resp.ok = 200 <= status_code < 400
    resp.status_code = status_code
    resp.json.return_value = json_data
    resp.text = json.dumps(json_data)
    return resp


def _register(client, event, **overrides):
    body = {
        'eventId': str(event.id),
        'fullName': 'Ama Mensah',
        'email': 'ama@example.com',
        'phone': '0241234567',
        'team': 'red',
    }
    body.update(overrides)
    return client.post('/api/v1/registrations', json=body)


class TestPaymentFlowIntegration:
    """Integration tests for complete payment flows"""

    def test_complete_payment_flow(self, client, paid_event):
        # Step 1: Register
        reg_response = _register(client, paid_event)
        assert reg_response.status_code == 201
        registration = reg_response.get_json()['data']
        assert registration['payment_status'] == 'pending'

        # Step 2: Trigger the phone prompt
        with patch('requests.post', return_value=_mock_http_response({
            'success': True,
            'message': 'Prompt sent',
            'transactionId': 'TX-555',
        })) as mock_post:
            pay_response = client.post('/api/v1/payments/initiate', json={
                'accountNumber': '0241234567',
                'amount': '150.00',
                'narration': 'Ticket: Game Day - Ama Mensah',
                'network': 'mtn',
                'registrationId': registration['id'],
            })

        assert pay_response.status_code == 200
        payment = pay_response.get_json()
        assert payment['success'] is True
        assert payment['transactionId'] == 'TX-555'

        sent = mock_post.call_args.kwargs
        assert sent['json']['accountNumber'] == '233241234567'
        assert sent['json']['network'] == '300591'
        assert sent['headers']['X-Partner-Code'] == 'TEST'

        # Reference recorded, still awaiting confirmation
        status_response = client.get(f"/api/v1/registrations/{registration['id']}")
        stored = status_response.get_json()['data']
        assert stored['payment_reference'] == payment['reference']
        assert stored['payment_status'] == 'pending'

        # Step 3: Gateway callback
        webhook_response = client.post('/api/v1/webhooks/dcm', json={
            'reference': payment['reference'],
            'status': 'successful',
        })
        assert webhook_response.get_json()['registrationId'] == registration['id']

        # Step 4: Browser sees the result
        status_response = client.get(f"/api/v1/registrations/{registration['id']}")
        assert status_response.get_json()['data']['payment_status'] == 'completed'

    def test_free_event_registration(self, client, free_event):
        response = _register(client, free_event)

        assert response.status_code == 201
        assert response.get_json()['data']['payment_status'] == 'free'

    def test_free_registration_cannot_be_charged(self, client, free_event):
        registration = _register(client, free_event).get_json()['data']

        with patch('requests.post') as mock_post:
            response = client.post('/api/v1/payments/initiate', json={
                'accountNumber': '0241234567',
                'amount': '10.00',
                'network': 'mtn',
                'registrationId': registration['id'],
            })

        assert response.status_code == 409
        assert response.get_json()['success'] is False
        mock_post.assert_not_called()

    def test_gateway_rejection(self, client):
        with patch('requests.post', return_value=_mock_http_response(
                {'success': False, 'message': 'Subscriber not found'}, status_code=400)):
            response = client.post('/api/v1/payments/initiate', json={
                'accountNumber': '0241234567',
                'amount': 150,
                'network': 'telecel',
            })

        assert response.status_code == 502
        data = response.get_json()
        assert data['success'] is False
        assert data['error'] == 'Subscriber not found'

    def test_gateway_unreachable(self, client):
        with patch('requests.post', side_effect=requests.ConnectionError('refused')):
            response = client.post('/api/v1/payments/initiate', json={
                'accountNumber': '0241234567',
                'amount': 150,
                'network': 'airteltigo',
            })

        assert response.status_code == 502
        assert response.get_json()['error'] == 'Unable to process payment. Please try again.'

    def test_missing_fields(self, client):
        with patch('requests.post') as mock_post:
            response = client.post('/api/v1/payments/initiate', json={'narration': 'x'})

        assert response.status_code == 400
        data = response.get_json()
        assert data['success'] is False
        assert set(data['messages']) == {'accountNumber', 'amount', 'network'}
        mock_post.assert_not_called()

    def test_invalid_fields(self, client):
        response = client.post('/api/v1/payments/initiate', json={
            'accountNumber': 'abc',
            'amount': '-5',
            'network': 'vodafone',
        })

        assert response.status_code == 400
        assert set(response.get_json()['messages']) == {'accountNumber', 'amount', 'network'}

    def test_unknown_registration(self, client):
        response = client.post('/api/v1/payments/initiate', json={
            'accountNumber': '0241234567',
            'amount': '10.00',
            'network': 'mtn',
            'registrationId': '00000000-0000-0000-0000-000000000000',
        })

        assert response.status_code == 404

    def test_idempotent_initiation(self, client):
        body = {'accountNumber': '0241234567', 'amount': '150.00', 'network': 'mtn'}
        headers = {'Idempotency-Key': 'checkout-abc'}

        with patch('requests.post', return_value=_mock_http_response({'success': True})) as mock_post:
            first = client.post('/api/v1/payments/initiate', json=body, headers=headers)
            second = client.post('/api/v1/payments/initiate', json=body, headers=headers)

        assert mock_post.call_count == 1
        assert first.status_code == second.status_code == 200
        assert first.get_json() == second.get_json()

    def test_failed_initiation_is_not_cached(self, client):
        body = {'accountNumber': '0241234567', 'amount': '150.00', 'network': 'mtn'}
        headers = {'Idempotency-Key': 'checkout-retry'}

        with patch('requests.post', side_effect=[
            requests.ConnectionError('refused'),
            _mock_http_response({'success': True}),
        ]) as mock_post:
            first = client.post('/api/v1/payments/initiate', json=body, headers=headers)
            second = client.post('/api/v1/payments/initiate', json=body, headers=headers)

        assert mock_post.call_count == 2
        assert first.status_code == 502
        assert second.status_code == 200

    def test_cors_preflight(self, client):
        response = client.options(
            '/api/v1/payments/initiate',
            headers={
                'Origin': 'https://tickets.example.com',
                'Access-Control-Request-Method': 'POST',
                'Access-Control-Request-Headers': 'content-type, authorization',
            }
        )

        assert response.status_code == 200
        assert response.headers['Access-Control-Allow-Origin'] == '*'

    def test_amount_must_match_ticket_price(self, client, paid_event):
        registration = _register(client, paid_event).get_json()['data']

        with patch('requests.post') as mock_post:
            response = client.post('/api/v1/payments/initiate', json={
                'accountNumber': '0241234567',
                'amount': '0.01',
                'network': 'mtn',
                'registrationId': registration['id'],
            })

        assert response.status_code == 400
        data = response.get_json()
        assert data['success'] is False
        assert data['error'] == 'Amount mismatch'
        mock_post.assert_not_called()

        stored = client.get(f"/api/v1/registrations/{registration['id']}").get_json()['data']
        assert stored['payment_reference'] is None

    def test_amount_with_more_than_two_places(self, client):
        with patch('requests.post') as mock_post:
            response = client.post('/api/v1/payments/initiate', json={
                'accountNumber': '0241234567',
                'amount': '1.239',
                'network': 'mtn',
            })

        assert response.status_code == 400
        assert set(response.get_json()['messages']) == {'amount'}
        mock_post.assert_not_called()

    def test_initiation_proceeds_when_cache_is_down(self, client):
        body = {'accountNumber': '0241234567', 'amount': '150.00', 'network': 'mtn'}
        headers = {'Idempotency-Key': 'checkout-no-redis'}
        broken_redis = Mock()
        broken_redis.get.side_effect = redis.ConnectionError('refused')
        broken_redis.set.side_effect = redis.ConnectionError('refused')

        with patch('app.services.idempotency_service.redis_client', broken_redis), \
                patch('requests.post', return_value=_mock_http_response({'success': True})) as mock_post:
            response = client.post('/api/v1/payments/initiate', json=body, headers=headers)

        assert response.status_code == 200
        assert response.get_json()['success'] is True
        mock_post.assert_called_once()

    def test_response_returned_when_cache_write_fails(self, client):
        body = {'accountNumber': '0241234567', 'amount': '150.00', 'network': 'mtn'}
        headers = {'Idempotency-Key': 'checkout-readonly-redis'}
        flaky_redis = Mock()
        flaky_redis.get.return_value = None
        flaky_redis.set.side_effect = redis.ConnectionError('refused')

        with patch('app.services.idempotency_service.redis_client', flaky_redis), \
                patch('requests.post', return_value=_mock_http_response({'success': True})):
            response = client.post('/api/v1/payments/initiate', json=body, headers=headers)

        assert response.status_code == 200
        flaky_redis.set.assert_called_once()
