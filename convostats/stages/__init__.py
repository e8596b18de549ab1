"""
Pipeline stages for ConvoStats.

Each stage consumes the complete output of the previous one:
- Parsing: raw bytes to a list of conversation objects
- Extraction: conversations to message texts
- Tokenization: message texts to lowercase word tokens
- Aggregation: tokens to ranked frequency tables
- Sentiment: overall sentiment score of the joined text
- Reporting: frequency tables and score to report files
"""
