"""Ballot assignment and ranked-vote scoring for hackathon rounds."""
