"""Routing engine — tour scoring, gap filling and venue-network trust.

Modules:
    config          Centralized thresholds and configuration
    geo             Haversine distance and travel-time estimates
    venue_status    Booking status enum and transition table
    tour_score      Per-leg metrics and the tour optimization score
    gap_detector    Idle stretches between confirmed stops
    gap_ranker      Candidate venue scoring for a gap
    network_trust   Pairwise venue compatibility edges

Pipeline:
    TourScoreCalculator (on stop mutation)
    GapDetector → GapSuggestionRanker (on demand)
    NetworkTrustScorer (batch, on venue population change)
"""
