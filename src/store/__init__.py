"""Object store and keyed store collaborators.

This package wraps the boto3 S3 and DynamoDB calls used by ingest.
It keeps AWS client details out of the pipeline logic.
"""
