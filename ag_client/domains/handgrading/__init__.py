# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Handgrading domain.

Entities:
- HandgradingRubric: per-project rubric embedding criteria and annotations
- Criterion, Annotation: rubric items
- HandgradingResult: per-group graded aggregate
- AppliedAnnotation, Comment, CriterionResult: children of a result
"""

from ag_client.domains.handgrading.annotation import (
    Annotation,
    AnnotationObserver,
    NewAnnotationData,
)
from ag_client.domains.handgrading.applied_annotation import (
    AppliedAnnotation,
    AppliedAnnotationObserver,
    NewAppliedAnnotationData,
)
from ag_client.domains.handgrading.comment import Comment, CommentObserver, NewCommentData
from ag_client.domains.handgrading.criterion import (
    Criterion,
    CriterionObserver,
    NewCriterionData,
)
from ag_client.domains.handgrading.criterion_result import (
    CriterionResult,
    CriterionResultObserver,
)
from ag_client.domains.handgrading.location import Location
from ag_client.domains.handgrading.result import (
    GroupHandgradingResultSummary,
    HandgradingResult,
    HandgradingResultObserver,
    HandgradingResultStatus,
)
from ag_client.domains.handgrading.rubric import (
    HandgradingRubric,
    HandgradingRubricObserver,
    NewHandgradingRubricData,
    PointsStyle,
)

__all__ = [
    "Annotation",
    "AnnotationObserver",
    "AppliedAnnotation",
    "AppliedAnnotationObserver",
    "Comment",
    "CommentObserver",
    "Criterion",
    "CriterionObserver",
    "CriterionResult",
    "CriterionResultObserver",
    "GroupHandgradingResultSummary",
    "HandgradingResult",
    "HandgradingResultObserver",
    "HandgradingResultStatus",
    "HandgradingRubric",
    "HandgradingRubricObserver",
    "Location",
    "NewAnnotationData",
    "NewAppliedAnnotationData",
    "NewCommentData",
    "NewCriterionData",
    "NewHandgradingRubricData",
    "PointsStyle",
]
