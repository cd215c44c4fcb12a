"""GraphQL query and mutation templates for the Linear API.

Kept together so they are easy to audit. Paged queries accept ``$first``
and ``$after`` and select ``pageInfo { hasNextPage endCursor }``.
"""

# -- Credentials -----------------------------------------------------------

VALIDATE_CREDENTIALS_QUERY = """
query Issues {
  issues (first: 1) {
    nodes {
      id
    }
  }
}
"""

# -- Option lists ----------------------------------------------------------

GET_TEAMS_QUERY = """
query Teams ($first: Int, $after: String) {
  teams (first: $first, after: $after) {
    nodes {
      id
      name
    }
    pageInfo { hasNextPage endCursor }
  }
}
"""

GET_USERS_QUERY = """
query Users ($first: Int, $after: String) {
  users (first: $first, after: $after) {
    nodes {
      id
      name
    }
    pageInfo { hasNextPage endCursor }
  }
}
"""

GET_STATES_QUERY = """
query States ($first: Int, $after: String, $filter: WorkflowStateFilter) {
  workflowStates (first: $first, after: $after, filter: $filter) {
    nodes {
      id
      name
    }
    pageInfo { hasNextPage endCursor }
  }
}
"""

GET_ISSUE_TEAM_QUERY = """
query IssueTeam ($issueId: String!) {
  issue (id: $issueId) {
    team {
      id
    }
  }
}
"""

# -- Issues ----------------------------------------------------------------

_ISSUE_FIELDS = """
      id
      identifier
      title
      priority
      archivedAt
      assignee { id displayName }
      state { id name }
      createdAt
      creator { id displayName }
      description
      dueDate
      cycle { id name }
      url
"""

CREATE_ISSUE_MUTATION = (
    """
mutation IssueCreate (
  $title: String!,
  $teamId: String!,
  $description: String,
  $assigneeId: String,
  $priority: Int,
  $stateId: String
) {
  issueCreate (
    input: {
      title: $title
      description: $description
      teamId: $teamId
      assigneeId: $assigneeId
      priority: $priority
      stateId: $stateId
    }
  ) {
    success
    issue {"""
    + _ISSUE_FIELDS
    + """    }
  }
}
"""
)

GET_ISSUE_QUERY = (
    """
query Issue ($issueId: String!) {
  issue (id: $issueId) {"""
    + _ISSUE_FIELDS
    + """  }
}
"""
)

GET_ISSUES_QUERY = (
    """
query Issues ($first: Int, $after: String) {
  issues (first: $first, after: $after) {
    nodes {"""
    + _ISSUE_FIELDS
    + """    }
    pageInfo { hasNextPage endCursor }
  }
}
"""
)

UPDATE_ISSUE_MUTATION = (
    """
mutation IssueUpdate (
  $issueId: String!,
  $title: String,
  $teamId: String,
  $description: String,
  $assigneeId: String,
  $priority: Int,
  $stateId: String
) {
  issueUpdate (
    id: $issueId,
    input: {
      title: $title
      teamId: $teamId
      description: $description
      assigneeId: $assigneeId
      priority: $priority
      stateId: $stateId
    }
  ) {
    success
    issue {"""
    + _ISSUE_FIELDS
    + """    }
  }
}
"""
)

DELETE_ISSUE_MUTATION = """
mutation IssueDelete ($issueId: String!) {
  issueDelete (id: $issueId) {
    success
  }
}
"""

ADD_ISSUE_LINK_MUTATION = """
mutation AttachmentLinkURL ($url: String!, $issueId: String!) {
  attachmentLinkURL (url: $url, issueId: $issueId) {
    success
    attachment { id title url }
  }
}
"""

# -- Comments --------------------------------------------------------------

ADD_COMMENT_MUTATION = """
mutation CommentCreate ($issueId: String!, $body: String!, $parentId: String) {
  commentCreate (input: { issueId: $issueId, body: $body, parentId: $parentId }) {
    success
    comment {
      id
    }
  }
}
"""
