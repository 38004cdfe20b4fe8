"""
PhotoStream feed service

Photo records, reverse-chronological feed pagination, likes and owner-only
deletes over DynamoDB and S3, exposed as AWS Lambda functions.
"""

__version__ = "1.0.0"
