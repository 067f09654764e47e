#!/usr/bin/env python3
"""
Reactive behavior navigation node.

Drives the robot with one of three laser-only behaviors:
  - wall_follow:        keep a wall at wall_follow_distance on one side
  - controlled_random:  straight runs, fixed-angle turns in a random direction
  - total_random:       straight runs, random-angle turns in a random direction

/scan feeds the controller, /odom (optional) measures turn progress,
and one Twist per control cycle goes out on /cmd_vel.
"""
import math
from typing import Optional

import rclpy                                      # ROS 2 client library
from rclpy.node import Node                       # base node class
from rclpy.qos import qos_profile_sensor_data
from geometry_msgs.msg import Twist               # velocity command
from nav_msgs.msg import Odometry                 # odometry message
from sensor_msgs.msg import LaserScan             # laser scan message

from behavior_nav_core import (
    ActuationError,
    BehaviorMode,
    ControllerConfig,
    NavigationController,
    RandomDirectionSelector,
)


class TwistSink:
    """Actuation port backed by a Twist publisher."""

    def __init__(self, publisher) -> None:
        self.publisher = publisher

    def send(self, linear_velocity: float, angular_velocity: float) -> None:
        msg = Twist()
        msg.linear.x = float(linear_velocity)
        msg.angular.z = float(angular_velocity)
        self.publisher.publish(msg)


class BehaviorNav(Node):
    def __init__(self):
        super().__init__("behavior_nav")

        # --- parameters ---------------------------------------------------
        self.declare_parameter("behavior", BehaviorMode.WALL_FOLLOW.value)
        self.declare_parameter("scan_topic", "/scan")
        self.declare_parameter("odom_topic", "/odom")       # empty → dead-reckon turns
        self.declare_parameter("cmd_vel_topic", "/cmd_vel")
        self.declare_parameter("random_seed", -1)           # -1 → unseeded

        self.cfg = ControllerConfig.from_node(self)
        self.mode = BehaviorMode(str(self.get_parameter("behavior").value))
        scan_topic = str(self.get_parameter("scan_topic").value)
        odom_topic = str(self.get_parameter("odom_topic").value)
        cmd_vel_topic = str(self.get_parameter("cmd_vel_topic").value)
        seed: Optional[int] = int(self.get_parameter("random_seed").value)
        if seed < 0:
            seed = None

        if self.cfg.wall_distance_below_security:
            self.get_logger().warn(
                f"wall_follow_distance ({self.cfg.wall_follow_distance:.2f} m) is below "
                f"security_distance ({self.cfg.security_distance:.2f} m)"
            )

        # --- publisher / controller ----------------------------------------
        self.cmd_pub = self.create_publisher(Twist, cmd_vel_topic, 10)
        self.controller = NavigationController(
            TwistSink(self.cmd_pub),
            cfg=self.cfg,
            selector=RandomDirectionSelector(seed=seed),
            clock=self._now_sec,
        )

        # --- subscribers ---------------------------------------------------
        self.create_subscription(LaserScan, scan_topic, self.scan_cb, qos_profile_sensor_data)
        if odom_topic:
            self.create_subscription(Odometry, odom_topic, self.odom_cb, 10)

        # --- timer ---------------------------------------------------------
        self.timer = self.create_timer(self.cfg.control_period, self.control_loop)

        self.get_logger().info(
            f"Behavior nav started: behavior={self.mode.value} "
            f"security={self.cfg.security_distance:.2f}m wall={self.cfg.wall_follow_distance:.2f}m "
            f"v={self.cfg.linear_velocity:.2f} w={self.cfg.angular_velocity:.2f} "
            f"rate={self.cfg.control_rate:.1f}Hz"
        )

    # === callbacks =========================================================
    def scan_cb(self, msg: LaserScan):
        stamp = msg.header.stamp.sec + msg.header.stamp.nanosec * 1e-9
        self.controller.on_scan(msg, stamp=stamp)

    def odom_cb(self, msg: Odometry):
        q = msg.pose.pose.orientation                # quaternion to yaw
        siny = 2.0 * (q.w * q.z + q.x * q.y)
        cosy = 1.0 - 2.0 * (q.y * q.y + q.z * q.z)
        self.controller.update_heading(math.atan2(siny, cosy))

    # === control loop ======================================================
    def control_loop(self):
        try:
            result = self.controller.step(self.mode)
        except ActuationError as exc:
            self.get_logger().error(str(exc))
            return

        for level, text in result.events:
            if level == "warn":
                self.get_logger().warn(text)
            elif level == "error":
                self.get_logger().error(text)
            else:
                self.get_logger().info(text)

        self.get_logger().debug(f"{result.diagnostics}")

    def shutdown(self):
        """Cancel the control timer and leave the robot stopped."""
        self.destroy_timer(self.timer)
        try:
            self.controller.stop()
        except ActuationError as exc:
            self.get_logger().error(str(exc))

    # === helpers ===========================================================
    def _now_sec(self) -> float:
        return self.get_clock().now().nanoseconds / 1e9


def main(args=None):
    rclpy.init(args=args)
    node = BehaviorNav()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    node.shutdown()
    node.destroy_node()
    rclpy.shutdown()


if __name__ == "__main__":
    main()
