"""Environment variable models for the Lambda functions."""
