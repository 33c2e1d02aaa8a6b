"""Order notifications: SNS alerts for the back-office, email receipts for customers."""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app
from flask_mail import Message
from smtplib import SMTPException

from swishdrip.extensions import mail

logger = logging.getLogger(__name__)


def send_notification(subject, message):
    """Publish to the configured SNS topic, if any."""
    topic_arn = current_app.config.get('SNS_TOPIC_ARN')
    if not topic_arn:
        return False
    try:
        sns = boto3.client('sns', region_name=current_app.config['AWS_REGION'])
        sns.publish(
            TopicArn=topic_arn,
            Subject=subject,
            Message=message
        )
    except (ClientError, BotoCoreError) as e:
        logger.warning('Error sending notification: %s', e)
        return False
    return True


def send_receipt(order):
    """Email an order summary to the customer who placed it."""
    if not current_app.config.get('ORDER_RECEIPTS_ENABLED'):
        return False
    customer = order.customer
    if customer is None or not customer.email:
        return False

    lines = [f'- {item.name}{f" ({item.size})" if item.size else ""} x {item.quantity}: '
             f'{item.price * item.quantity:.2f}' for item in order.items]
    body = '\n'.join([
        f'Hi {order.customer_name},',
        '',
        f'Thanks for shopping at Swish Drip! Your order #{order.order_number} is {order.status}.',
        '',
        *lines,
        '',
        f'Total: {order.total:.2f}',
        f'Delivery to: {order.location}',
    ])
    try:
        mail.send(Message(
            subject=f'Swish Drip order #{order.order_number}',
            recipients=[customer.email],
            body=body
        ))
    except (SMTPException, OSError) as e:
        logger.warning('Error sending receipt for order %s: %s', order.order_number, e)
        return False
    return True


def order_placed(order):
    send_notification(
        'New Order Received',
        f'Order #{order.order_number} from {order.customer_name} ({order.phone}) '
        f'for {order.total:.2f}, {len(order.items)} item(s). Deliver to: {order.location}'
    )
    send_receipt(order)


def order_status_changed(order):
    send_notification(
        'Order Status Updated',
        f'Order #{order.order_number} is now {order.status}.'
    )
    send_receipt(order)
